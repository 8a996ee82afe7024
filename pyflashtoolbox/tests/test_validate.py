#!/usr/bin/env python3
"""
Validation tests for validate and classes modules.
Run with: python3 -m pytest pyflashtoolbox/tests/ -v
Or standalone: python3 pyflashtoolbox/tests/test_validate.py
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
import pyflashtoolbox.validate as validate
from pyflashtoolbox.classes import phase, rr_status, flash_method, worst_status, FlashResult

def test_validate_methods_phase_aliases():
    for name in ['L', 'l', 'liq', 'LIQUID']:
        assert validate.validate_methods(['phase'], [name]) == phase.LIQUID
    for name in ['V', 'vap', 'vapor', 'Vapour']:
        assert validate.validate_methods(['phase'], [name]) == phase.VAPOR

def test_validate_methods_passthrough():
    assert validate.validate_methods(['phase'], [phase.VAPOR]) == phase.VAPOR

def test_validate_methods_multiple():
    p, s = validate.validate_methods(['phase', 'rrstatus'], ['L', 'converged'])
    assert p == phase.LIQUID
    assert s == rr_status.CONVERGED

def test_validate_methods_flash_method_aliases():
    assert validate.validate_methods(['flashmethod'], ['ss']) == flash_method.SS
    assert validate.validate_methods(['flashmethod'], ['Anderson']) == flash_method.ASS
    assert validate.validate_methods(['flashmethod'], ['ass']) == flash_method.ASS
    assert validate.validate_methods(['flashmethod'], ['nr']) == flash_method.NEWTON
    assert validate.validate_methods(['flashmethod'], [flash_method.NEWTON]) == flash_method.NEWTON
    with pytest.raises(ValueError):
        validate.validate_methods(['flashmethod'], ['broyden'])

def test_worst_status():
    assert worst_status([]) == rr_status.CONVERGED
    assert worst_status([rr_status.CONVERGED, rr_status.MAX_ITERATIONS]) == rr_status.MAX_ITERATIONS
    assert worst_status([rr_status.ZERO_DERIVATIVE, rr_status.CONVERGED]) == rr_status.ZERO_DERIVATIVE

def test_validate_methods_unknown():
    with pytest.raises(ValueError):
        validate.validate_methods(['phase'], ['plasma'])

def test_validate_composition():
    z = validate.validate_composition([0.2, 0.3, 0.5])
    assert isinstance(z, np.ndarray)
    assert z.dtype == float
    with pytest.raises(ValueError):
        validate.validate_composition([])
    with pytest.raises(ValueError):
        validate.validate_composition([0.5, np.nan, 0.5])

def test_validate_kvalues():
    with pytest.raises(ValueError):
        validate.validate_kvalues([2.0, np.inf])
    with pytest.raises(ValueError):
        validate.validate_kvalues([2.0, -1.0])

def test_validate_flash_inputs_copies():
    z_in = np.array([0.5, 0.5])
    z, K = validate.validate_flash_inputs(z_in, [2.0, 0.5])
    z[0] = 0.0
    assert z_in[0] == 0.5

def test_flash_result_unpacking():
    result = FlashResult(beta=1.5, x=np.array([0.5, 0.5]), y=np.array([0.6, 0.4]),
                         K=np.array([1.2, 0.8]), iterations=3, k_norm=1e-9, converged=True)
    beta, x, y = result
    assert beta == 1.5
    assert not result.two_phase
    assert result.status == rr_status.CONVERGED
    assert result.method == flash_method.SS
    assert len(result.history) == 0


if __name__ == '__main__':
    print("=" * 70)
    print("VALIDATE MODULE VALIDATION TESTS")
    print("=" * 70)

    tests = [v for k, v in globals().items() if k.startswith('test_')]
    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
            print(f"  PASS: {test.__name__}")
        except Exception as e:
            failed += 1
            print(f"  FAIL: {test.__name__}: {e}")

    print(f"\n{'=' * 70}")
    print(f"Results: {passed} passed, {failed} failed out of {passed + failed}")
    print("=" * 70)
    sys.exit(1 if failed > 0 else 0)
