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

from enum import Enum
from dataclasses import dataclass, field
import numpy as np

class phase(Enum):  # Phase for which fugacity coefficients are requested
    LIQUID = 0
    VAPOR = 1

class rr_status(Enum):  # Termination state of the Rachford-Rice Newton iteration, in increasing severity
    CONVERGED = 0
    MAX_ITERATIONS = 1
    ZERO_DERIVATIVE = 2

class flash_method(Enum):  # Outer K-value iteration scheme
    SS = 0      # Successive substitution
    ASS = 1     # Accelerated (Anderson mixed) successive substitution in log10(K)
    NEWTON = 2  # Newton iteration in log10(K)

class_dic = {
    "phase": phase,
    "rrstatus": rr_status,
    "flashmethod": flash_method,
}

# String aliases accepted in place of enum member names
alias_dic = {
    "phase": {'L': 'LIQUID', 'LIQ': 'LIQUID', 'V': 'VAPOR', 'VAP': 'VAPOR', 'VAPOUR': 'VAPOR'},
    "flashmethod": {'ANDERSON': 'ASS', 'NR': 'NEWTON'},
}

def worst_status(statuses) -> rr_status:
    """ Most severe rr_status in an iterable, CONVERGED if empty """
    return max(statuses, key=lambda s: s.value, default=rr_status.CONVERGED)


class RRDomainError(ValueError):
    """ Raised when the K-values do not define an open Rachford-Rice bracket,
        e.g. all K equal to 1, or all K on the same side of 1.
    """


class ConvergenceWarning(RuntimeWarning):
    """ Issued when the Newton or successive substitution iteration stops
        without meeting its tolerance. The best estimate is still returned.
    """


@dataclass
class RRResult:
    """ Outcome of a step-limited Newton solve of the Rachford-Rice equation.

    beta: Vapor molar fraction (may fall outside [0, 1] - a negative flash)
    iterations: Number of Newton iterations taken
    status: rr_status member describing how the iteration ended
    delta_beta: Last accepted step in beta
    beta_min, beta_max: Open bracket the iterates were confined to
    """
    beta: float
    iterations: int
    status: rr_status
    delta_beta: float
    beta_min: float
    beta_max: float

    @property
    def converged(self) -> bool:
        return self.status == rr_status.CONVERGED


@dataclass(frozen=True)
class FlashResult:
    """ Outcome of an isothermal two-phase flash.

    beta: Vapor molar fraction
    x: Liquid mole fractions (np.array)
    y: Vapor mole fractions (np.array)
    K: Final K-values that beta, x and y were computed from (np.array)
    iterations: Number of outer iterations performed
    k_norm: Last convergence residual. ||K_new - K||_2 for SS,
            ||log10(K_new) - log10(K)||_2 for ASS and NEWTON
    converged: True if the residual met the tolerance within the iteration budget
    status: Most severe Rachford-Rice termination state met during the flash
    history: Residual after each outer iteration (np.array)
    method: flash_method used

    Unpacks as (beta, x, y).
    """
    beta: float
    x: np.ndarray
    y: np.ndarray
    K: np.ndarray
    iterations: int
    k_norm: float
    converged: bool
    status: rr_status = field(default=rr_status.CONVERGED)
    history: np.ndarray = field(default_factory=lambda: np.zeros(0))
    method: flash_method = field(default=flash_method.SS)

    def __iter__(self):
        return iter((self.beta, self.x, self.y))

    @property
    def two_phase(self) -> bool:
        """ True when beta lies in the physical domain [0, 1] """
        return 0 <= self.beta <= 1
