import dataclasses
import math
import threading

import numpy as np
import pytest

from enhanced_aad.aad import (
    AADConfig,
    ArityError,
    Graph,
    GraphMismatchError,
    NumericDomainError,
    OperatorKind,
    current_graph,
    leaf,
    use_graph,
)


@pytest.fixture
def graph():
    return Graph(name="test")


def test_leaf_wraps_constant(graph):
    x = graph.leaf(2.5)
    assert x.as_floating_point() == 2.5
    assert float(x) == 2.5
    assert x.operator is OperatorKind.LEAF
    assert x.operands == ()
    assert x.is_leaf
    assert x.graph is graph


def test_ids_follow_construction_order(graph):
    a = graph.leaf(1.0)
    b = graph.leaf(2.0)
    c = a.add(b)
    d = c.squared()
    assert [a.id, b.id, c.id, d.id] == [0, 1, 2, 3]
    assert graph.n_nodes == 4
    assert graph.leaf(5.0).id == 4
    assert graph.n_nodes == 5


def test_operands_have_smaller_ids(graph):
    x = graph.leaf(1.0)
    y = x.mult(graph.leaf(7.0))
    z = y.add_product(y, graph.leaf(4.0)).exp().sqrt()
    stack = [z]
    while stack:
        node = stack.pop()
        for operand in node.operands:
            assert operand.id < node.id
            stack.append(operand)


@pytest.mark.parametrize("build, expected", [
    (lambda a, b, c: a.squared(), 9.0),
    (lambda a, b, c: c.sqrt(), 2.0),
    (lambda a, b, c: a.exp(), math.exp(3.0)),
    (lambda a, b, c: a.add(b), 5.0),
    (lambda a, b, c: a.sub(b), 1.0),
    (lambda a, b, c: a.mult(b), 6.0),
    (lambda a, b, c: a.div(b), 1.5),
    (lambda a, b, c: a.add_product(b, c), 11.0),
])
def test_operation_values(graph, build, expected):
    a, b, c = graph.leaf(3.0), graph.leaf(2.0), graph.leaf(4.0)
    assert build(a, b, c).as_floating_point() == pytest.approx(expected, rel=1e-15)


def test_operator_arity_and_operand_order(graph):
    base, x, y = graph.leaf(1.0), graph.leaf(2.0), graph.leaf(3.0)
    node = base.add_product(x, y)
    assert node.operator is OperatorKind.ADDPRODUCT
    assert node.operands == (base, x, y)
    assert OperatorKind.ADDPRODUCT.arity == 3
    assert OperatorKind.SQRT.arity == 1
    assert OperatorKind.LEAF.arity == 0


def test_operations_do_not_mutate_receiver(graph):
    a = graph.leaf(3.0)
    a.add(graph.leaf(1.0))
    a.squared()
    assert a.as_floating_point() == 3.0
    assert a.operands == ()


def test_node_is_frozen(graph):
    a = graph.leaf(3.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        a.value = 4.0


def test_nodes_hash_by_identity(graph):
    a = graph.leaf(1.0)
    b = graph.leaf(1.0)
    assert a != b
    assert len({a, b}) == 2


def test_operator_overloading_with_numbers(graph):
    a = graph.leaf(4.0)
    assert (a + 1.0).as_floating_point() == 5.0
    assert (1.0 + a).as_floating_point() == 5.0
    assert (a - 1.0).as_floating_point() == 3.0
    assert (10.0 - a).as_floating_point() == 6.0
    assert (a * 2.0).as_floating_point() == 8.0
    assert (2.0 * a).as_floating_point() == 8.0
    assert (a / 2.0).as_floating_point() == 2.0
    assert (2.0 / a).as_floating_point() == 0.5
    # constants land on the receiver's graph
    assert (2.0 * a).graph is graph


def test_str_and_repr(graph):
    a = graph.leaf(1.5)
    assert str(a) == "1.5"
    assert repr(a) == "Node(id=0, LEAF, value=1.5)"


def test_sqrt_of_negative_is_nan(graph):
    assert np.isnan(graph.leaf(-4.0).sqrt().as_floating_point())


def test_division_by_zero_follows_ieee(graph):
    zero = graph.leaf(0.0)
    assert graph.leaf(1.0).div(zero).as_floating_point() == math.inf
    assert graph.leaf(-1.0).div(zero).as_floating_point() == -math.inf
    assert np.isnan(zero.div(zero).as_floating_point())


def test_exp_overflow_is_inf(graph):
    assert graph.leaf(1000.0).exp().as_floating_point() == math.inf


def test_mixing_graphs_is_rejected():
    a = Graph().leaf(1.0)
    b = Graph().leaf(2.0)
    with pytest.raises(GraphMismatchError):
        a.add(b)
    with pytest.raises(ValueError):
        a.add_product(a, b)


def test_arity_mismatch_is_rejected(graph):
    a = graph.leaf(1.0)
    with pytest.raises(ArityError):
        graph.new_node(1.0, OperatorKind.ADD, (a,))
    with pytest.raises(ArityError):
        graph.new_node(1.0, OperatorKind.SQRT, (a, a))
    with pytest.raises(ArityError):
        graph.new_node(1.0, OperatorKind.LEAF, ())


def test_non_numeric_operands_are_rejected(graph):
    a = graph.leaf(1.0)
    with pytest.raises(TypeError):
        graph.leaf("1.0")
    with pytest.raises(TypeError):
        graph.leaf(True)
    with pytest.raises(TypeError):
        a.add("2.0")
    with pytest.raises(TypeError):
        graph.leaf(a)


def test_strict_domain_rejects_invalid_math():
    graph = Graph(config=AADConfig(strict_domain=True))
    with pytest.raises(NumericDomainError):
        graph.leaf(-1.0).sqrt()
    with pytest.raises(NumericDomainError):
        graph.leaf(1.0).div(graph.leaf(0.0))
    with pytest.raises(ArithmeticError):
        graph.leaf(1.0) / 0.0
    # valid inputs are unaffected
    assert graph.leaf(4.0).sqrt().as_floating_point() == 2.0


def test_use_graph_switches_and_restores():
    outer = current_graph()
    with use_graph() as g:
        assert current_graph() is g
        x = leaf(3.0)
        assert x.graph is g
        assert x.id == 0
    assert current_graph() is outer


def test_use_graph_restores_after_error():
    outer = current_graph()
    with pytest.raises(RuntimeError):
        with use_graph():
            raise RuntimeError("boom")
    assert current_graph() is outer


def test_concurrent_construction_gives_unique_ids(graph):
    n_threads, n_per_thread = 8, 500
    ids = [[] for _ in range(n_threads)]
    base = graph.leaf(1.0)

    def build(slot):
        x = base
        for _ in range(n_per_thread):
            x = x.add(base)
            ids[slot].append(x.id)

    threads = [threading.Thread(target=build, args=(i,)) for i in range(n_threads)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    all_ids = [i for chunk in ids for i in chunk]
    assert len(set(all_ids)) == n_threads * n_per_thread
    assert graph.n_nodes == n_threads * n_per_thread + 1
    for chunk in ids:
        assert chunk == sorted(chunk)


def test_use_graph_is_isolated_per_thread():
    # A enters, B enters, A exits, B exits: each thread must restore its own graph
    a_entered, b_entered, a_exited = threading.Event(), threading.Event(), threading.Event()
    seen = {}

    def worker(name, enter_after, entered, exit_after, exited=None):
        outer = current_graph()
        before = leaf(2.0)
        enter_after.wait(5)
        with use_graph(Graph(name=name)) as g:
            entered.set()
            exit_after.wait(5)
            seen[name, 'inside'] = current_graph() is g
            seen[name, 'leaf_graph'] = leaf(1.0).graph is g
        if exited is not None:
            exited.set()
        seen[name, 'restored'] = current_graph() is outer
        seen[name, 'combines'] = before.add(leaf(3.0)).as_floating_point() == 5.0

    started = threading.Event()
    started.set()
    a = threading.Thread(target=worker, args=('A', started, a_entered, b_entered, a_exited))
    b = threading.Thread(target=worker, args=('B', a_entered, b_entered, a_exited))
    a.start()
    b.start()
    a.join()
    b.join()

    assert len(seen) == 8
    assert all(seen.values()), seen
