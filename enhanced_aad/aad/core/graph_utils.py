"""
Computation graph helpers.

Print and analyse the structure of the graph reachable from a root node.
Only the reachable part is considered: a Graph does not keep references to
the nodes it stamped.
"""

import numpy as np
from typing import Dict, List
from collections import Counter

from .node import Node


def reachable_nodes(root: Node) -> List[Node]:
    """All nodes reachable from `root` (root included), sorted by ascending id."""
    seen = {root}
    stack = [root]
    while stack:
        node = stack.pop()
        for operand in node.operands:
            if operand not in seen:
                seen.add(operand)
                stack.append(operand)
    return sorted(seen, key=lambda n: n.id)


def get_graph_stats(root: Node) -> Dict:
    """
    Statistics of the graph reachable from `root` (no printing).

    Returns:
        dict with nodes, edges, leaves, fan-in/fan-out figures and an
        operation breakdown {operator name: count}
    """
    nodes = reachable_nodes(root)
    n_nodes = len(nodes)
    n_edges = sum(len(node.operands) for node in nodes)

    # fan-in: operands per node
    fan_ins = [len(node.operands) for node in nodes]

    # fan-out: how many downstream nodes use each node as an operand
    fan_out = Counter()
    for node in nodes:
        for operand in node.operands:
            fan_out[operand] += 1
    fan_outs = [fan_out[node] for node in nodes]

    op_counter = Counter(node.operator.name for node in nodes)

    return {
        'nodes': n_nodes,
        'edges': n_edges,
        'leaves': sum(1 for node in nodes if node.is_leaf),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'operations': dict(op_counter)
    }


def print_graph_summary(root: Node, detailed: bool = False) -> Dict:
    """
    Print a summary of the graph reachable from `root`.

    Args:
        root: output node
        detailed: also list every node (only for graphs of at most 100 nodes)

    Returns:
        the statistics dict of get_graph_stats
    """
    stats = get_graph_stats(root)
    n_nodes = stats['nodes']

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {n_nodes:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Leaves:             {stats['leaves']:,}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / n_nodes
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed and n_nodes <= 100:
        print()
        print("="*70)
        print("DETAILED NODE LIST")
        print("="*70)
        for node in reachable_nodes(root):
            operand_info = ", ".join(f"Node{operand.id}" for operand in node.operands)
            print(f"Node {node.id:3d}: {node.operator.name:12s} <- [{operand_info}]")

    print("="*70 + "\n")
    return stats


def print_computation_graph(root: Node, max_nodes: int = 20) -> None:
    """
    Print the reachable nodes in construction order.

    Args:
        root: output node
        max_nodes: maximum number of nodes to print
    """
    print("\n" + "="*70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("="*70)

    nodes = reachable_nodes(root)
    for node in nodes[:max_nodes]:
        if node.operands:
            operand_info = ", ".join(f"Node{operand.id}" for operand in node.operands)
            print(f"Node {node.id:4d}: {node.operator.name:12s} ({float(node.value):14.6g}) <- [{operand_info}]")
        else:
            print(f"Node {node.id:4d}: {node.operator.name:12s} ({float(node.value):14.6g}) [leaf/input]")

    if len(nodes) > max_nodes:
        print(f"... ({len(nodes) - max_nodes} more nodes)")

    print("="*70 + "\n")


def analyze_graph_complexity(root: Node) -> str:
    """
    Text report on the size of the graph reachable from `root`.
    """
    stats = get_graph_stats(root)

    report = []
    report.append("Graph Complexity Analysis:")
    report.append(f"  Total operations: {stats['nodes']:,}")
    report.append(f"  Total connections: {stats['edges']:,}")
    report.append(f"  Average branching: {stats['avg_fan_out']:.2f}")

    if stats['nodes'] < 1000:
        complexity = "Low"
    elif stats['nodes'] < 10000:
        complexity = "Medium"
    else:
        complexity = "High"

    report.append(f"  Complexity level: {complexity}")

    top_ops = sorted(stats['operations'].items(), key=lambda x: x[1], reverse=True)[:3]
    report.append("  Top operations:")
    for op, count in top_ops:
        pct = 100.0 * count / stats['nodes']
        report.append(f"    - {op}: {pct:.1f}%")

    return "\n".join(report)
