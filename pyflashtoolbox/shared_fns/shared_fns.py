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

import numpy as np
import numpy.typing as npt
from typing import Union, List

def convert_to_numpy(input_data: Union[npt.ArrayLike, List[float], float]) -> np.ndarray:
    # Convert input data to a 1-D float numpy array ensuring it is always sizeable
    if isinstance(input_data, np.ndarray) and input_data.dtype == float and input_data.ndim == 1:
        # Input is already a float array, just return a copy so callers never alias it
        return input_data.copy()
    # Convert list, tuple, scalar, or other types to numpy array
    # Ensuring even scalars become arrays with one element
    return np.atleast_1d(np.asarray(input_data, dtype=float)).ravel()

def vector_norm(a: np.ndarray, b: np.ndarray) -> float:
    """ Euclidean norm of the component-wise difference a - b """
    return float(np.linalg.norm(a - b))
