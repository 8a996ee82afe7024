#!/usr/bin/python3
# -*- coding: utf-8 -*-

"""
    pyFlashToolbox - Isothermal two-phase flash utilities
              Copyright (C) 2022, Mark Burgoyne

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    The GNU General Public License can be found in the LICENSE directory,
    and at  <https://www.gnu.org/licenses/>.

          Contact author at mark.w.burgoyne@gmail.com
"""

from typing import Union, List
import numpy as np
import numpy.typing as npt

from pyflashtoolbox.classes import phase
from pyflashtoolbox.constants import WILSON_COEFF
from pyflashtoolbox.shared_fns import convert_to_numpy
from pyflashtoolbox.validate import validate_methods

def wilson_k(
    p: float,
    T: float,
    tc: Union[npt.ArrayLike, List[float]],
    pc: Union[npt.ArrayLike, List[float]],
    omega: Union[npt.ArrayLike, List[float]],
) -> np.ndarray:
    """
    Returns Wilson correlation K-value estimates for each component
        Ki = (Pci / P) * exp(5.373 * (1 + wi) * (1 - Tci / T))

    p: Pressure (same units as pc)
    T: Absolute temperature (same units as tc)
    tc: Critical temperatures
    pc: Critical pressures
    omega: Acentric factors
    """
    tc, pc, omega = [convert_to_numpy(a) for a in (tc, pc, omega)]
    if not (len(tc) == len(pc) == len(omega)):
        raise ValueError("tc, pc and omega must be the same length")
    if p <= 0 or T <= 0:
        raise ValueError("Pressure and temperature must be positive")
    return np.exp(np.log(pc / p) + WILSON_COEFF * (1 + omega) * (1 - tc / T))


class IdealSolutionModel:
    """
    Composition independent fugacity model whose K-values equal the Wilson
    estimate. Liquid coefficients are the Wilson K, vapor coefficients are unity,
    so K = phi_L / phi_V reproduces wilson_k at every composition.

    tc, pc, omega: Critical temperatures, pressures and acentric factors
    """
    def __init__(self, tc, pc, omega):
        self.tc = convert_to_numpy(tc)
        self.pc = convert_to_numpy(pc)
        self.omega = convert_to_numpy(omega)
        self.nc = len(self.tc)

    def fugacity_coefficient(self, p: float, T: float, composition: np.ndarray, phase_type=phase.LIQUID) -> np.ndarray:
        phase_type = validate_methods(['phase'], [phase_type])
        if len(composition) != self.nc:
            raise ValueError(f"Expected {self.nc} mole fractions, got {len(composition)}")
        if phase_type == phase.VAPOR:
            return np.ones(self.nc)
        return wilson_k(p, T, self.tc, self.pc, self.omega)
