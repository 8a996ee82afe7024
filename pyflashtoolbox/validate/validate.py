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

from typing import Tuple
import numpy as np
import numpy.typing as npt

from pyflashtoolbox.classes import class_dic, alias_dic
from pyflashtoolbox.constants import SUM_TOL
from pyflashtoolbox.shared_fns import convert_to_numpy

def validate_methods(names, variables):
    """ Resolve string options to their enum members, e.g. 'L' -> phase.LIQUID.
        Enum members are passed through untouched.
    """
    variables = list(variables)
    for m, method in enumerate(names):
        if isinstance(variables[m], str):
            key = variables[m].upper()
            key = alias_dic.get(method, {}).get(key, key)
            try:
                variables[m] = class_dic[method][key]
            except KeyError:
                choices = [e.name for e in class_dic[method]]
                raise ValueError(f"Incorrect {method} specified: '{variables[m]}'. Choose from {choices}")
    if len(variables) == 1:
        return variables[0]
    else:
        return variables

def validate_composition(z: npt.ArrayLike, name: str = 'z') -> np.ndarray:
    """ Check a mole fraction vector is finite, non-negative and sums to unity """
    z = convert_to_numpy(z)
    if z.size == 0:
        raise ValueError(f"{name} must contain at least one component")
    if not np.all(np.isfinite(z)):
        raise ValueError(f"{name} contains non-finite values: {z}")
    if np.any(z < 0):
        raise ValueError(f"{name} contains negative mole fractions: {z}")
    if abs(np.sum(z) - 1.0) > SUM_TOL:
        raise ValueError(f"{name} must sum to 1 (within {SUM_TOL}), sums to {np.sum(z)}")
    return z

def validate_kvalues(K: npt.ArrayLike, name: str = 'K') -> np.ndarray:
    """ Check a K-value vector is finite and strictly positive """
    K = convert_to_numpy(K)
    if K.size == 0:
        raise ValueError(f"{name} must contain at least one component")
    if not np.all(np.isfinite(K)):
        raise ValueError(f"{name} contains non-finite values: {K}")
    if np.any(K <= 0):
        raise ValueError(f"{name} must be strictly positive: {K}")
    return K

def validate_flash_inputs(z: npt.ArrayLike, K: npt.ArrayLike) -> Tuple[np.ndarray, np.ndarray]:
    """ Validate feed composition and K-values together. Returns both as float arrays """
    z = validate_composition(z)
    K = validate_kvalues(K)
    if len(z) != len(K):
        raise ValueError(f"z and K must be the same length ({len(z)} vs {len(K)})")
    return z, K
