"""
Comparison of two gradient results in the standard method format.
"""

import numpy as np
from typing import Dict


def compare_results(reference: Dict, candidate: Dict,
                    rtol: float = 1e-6, atol: float = 1e-8) -> Dict:
    """
    Compare the 'gradient' arrays of two method results.

    Returns:
        {
            'max_abs_diff': float,
            'max_rel_diff': float,   # relative to |reference|, floored at atol
            'match': bool,           # np.allclose(candidate, reference, rtol, atol)
            'reference': str,        # method names
            'candidate': str
        }
    """
    ref = np.asarray(reference['gradient'], dtype=float)
    cand = np.asarray(candidate['gradient'], dtype=float)
    if ref.shape != cand.shape:
        raise ValueError(f"gradient shapes differ: {ref.shape} vs {cand.shape}")

    if ref.size == 0:
        max_abs = max_rel = 0.0
    else:
        diff = np.abs(cand - ref)
        max_abs = float(np.max(diff))
        floor = max(atol, np.finfo(float).tiny)
        max_rel = float(np.max(diff / np.maximum(np.abs(ref), floor)))

    return {
        'max_abs_diff': max_abs,
        'max_rel_diff': max_rel,
        'match': bool(np.allclose(cand, ref, rtol=rtol, atol=atol)),
        'reference': reference.get('method'),
        'candidate': candidate.get('method'),
    }
