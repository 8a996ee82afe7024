#!/usr/bin/env python3
"""
Validation tests for kvalues module.
Run with: python3 -m pytest pyflashtoolbox/tests/ -v
Or standalone: python3 pyflashtoolbox/tests/test_kvalues.py
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
import pyflashtoolbox.kvalues as kv
from pyflashtoolbox.classes import phase

TC = [190.56, 305.32, 373.1]
PC = [4.599e6, 4.872e6, 8.963e6]
OMEGA = [0.011, 0.099, 0.100]

def test_wilson_at_critical_point():
    """At T = Tc and p = Pc the Wilson K-value is exactly 1"""
    K = kv.wilson_k(4.599e6, 190.56, [190.56], [4.599e6], [0.011])
    assert abs(K[0] - 1.0) < 1e-14

def test_wilson_formula():
    p, T = 55e5, 255.0
    K = kv.wilson_k(p, T, TC, PC, OMEGA)
    expected = np.array(PC) / p * np.exp(5.373 * (1 + np.array(OMEGA)) * (1 - np.array(TC) / T))
    np.testing.assert_allclose(K, expected, rtol=1e-14)
    # Methane volatile, ethane and H2S heavier at these conditions
    assert K[0] > 1 and K[1] < 1 and K[2] < 1

def test_wilson_trends():
    """K decreases with pressure and increases with temperature"""
    K_lo_p = kv.wilson_k(20e5, 255.0, TC, PC, OMEGA)
    K_hi_p = kv.wilson_k(60e5, 255.0, TC, PC, OMEGA)
    K_hi_t = kv.wilson_k(20e5, 300.0, TC, PC, OMEGA)
    assert np.all(K_hi_p < K_lo_p)
    assert np.all(K_hi_t > K_lo_p)

def test_wilson_bad_inputs():
    with pytest.raises(ValueError):
        kv.wilson_k(55e5, 255.0, TC, PC[:2], OMEGA)
    with pytest.raises(ValueError):
        kv.wilson_k(-1.0, 255.0, TC, PC, OMEGA)

def test_ideal_model_coefficients():
    model = kv.IdealSolutionModel(TC, PC, OMEGA)
    x = np.array([0.3, 0.5, 0.2])
    phi_L = model.fugacity_coefficient(55e5, 255.0, x, phase.LIQUID)
    phi_V = model.fugacity_coefficient(55e5, 255.0, x, phase.VAPOR)
    np.testing.assert_allclose(phi_L, kv.wilson_k(55e5, 255.0, TC, PC, OMEGA))
    np.testing.assert_array_equal(phi_V, np.ones(3))

def test_ideal_model_string_phase():
    model = kv.IdealSolutionModel(TC, PC, OMEGA)
    x = np.array([0.3, 0.5, 0.2])
    np.testing.assert_array_equal(model.fugacity_coefficient(55e5, 255.0, x, 'V'), np.ones(3))
    np.testing.assert_allclose(model.fugacity_coefficient(55e5, 255.0, x, 'liquid'),
                               model.fugacity_coefficient(55e5, 255.0, x, phase.LIQUID))
    with pytest.raises(ValueError):
        model.fugacity_coefficient(55e5, 255.0, x, 'solid')

def test_ideal_model_wrong_length():
    model = kv.IdealSolutionModel(TC, PC, OMEGA)
    with pytest.raises(ValueError):
        model.fugacity_coefficient(55e5, 255.0, np.array([0.5, 0.5]), phase.LIQUID)


if __name__ == '__main__':
    print("=" * 70)
    print("KVALUES MODULE VALIDATION TESTS")
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
