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

import logging
import warnings
from typing import Union, List, Tuple

import numpy as np
import numpy.typing as npt

from pyflashtoolbox.classes import rr_status, RRResult, RRDomainError, ConvergenceWarning
from pyflashtoolbox.constants import RR_TOL, RR_MAX_ITR
from pyflashtoolbox.validate import validate_flash_inputs, validate_kvalues

logger = logging.getLogger(__name__)

def rr_objective(zi: np.ndarray, ki: np.ndarray, beta: float) -> Tuple[float, float]:
    """
    Evaluates the Rachford-Rice objective and its derivative with respect to beta

    f(beta)  =  sum[ (Ki - 1) * zi / (1 + beta * (Ki - 1)) ]
    f'(beta) = -sum[ zi * (Ki - 1)^2 / (1 + beta * (Ki - 1))^2 ]

    Returns (f, f')
    """
    inner = (ki - 1) / (1 + beta * (ki - 1))
    f = np.sum(zi * inner)
    df = -np.sum(zi * inner ** 2)
    return float(f), float(df)

def rr_bracket(ki: Union[npt.ArrayLike, List[float]]) -> Tuple[float, float]:
    """
    Returns the open interval (beta_min, beta_max) on which the Rachford-Rice
    objective is continuous and monotonic:
        beta_min = 1 / (1 - max(K)),  beta_max = 1 / (1 - min(K))

    The interval exists only when at least one K lies above 1 and one below,
    in which case it always contains [0, 1]; otherwise RRDomainError is raised.
    """
    ki = validate_kvalues(ki)
    k_max, k_min = np.max(ki), np.min(ki)
    if np.all(ki == 1):
        raise RRDomainError(f"All K-values equal 1, Rachford-Rice bracket is undefined. K = {ki}")
    if not (k_max > 1 and k_min < 1):
        raise RRDomainError(f"K-values must straddle 1 for a two-phase root to exist "
                            f"(min K = {k_min}, max K = {k_max})")
    beta_min = 1 / (1 - k_max)
    beta_max = 1 / (1 - k_min)
    return float(beta_min), float(beta_max)

def phase_compositions(zi: np.ndarray, ki: np.ndarray, beta: float) -> Tuple[np.ndarray, np.ndarray]:
    """
    Material balance split of the feed at vapor fraction beta

    xi = zi / (1 + beta * (Ki - 1))
    yi = Ki * xi

    Returns (xi, yi)
    """
    xi = zi / (1 + beta * (ki - 1))
    yi = ki * xi
    return xi, yi

def rr_solve(
    zi: Union[npt.ArrayLike, list],
    ki: Union[npt.ArrayLike, list],
    tol: float = RR_TOL,
    max_iter: int = RR_MAX_ITR
) -> RRResult:
    """
    Solves the Rachford-Rice equation for vapor fraction using a step-limited
    Newton method, starting from the midpoint of the bracket (beta_min, beta_max).
    Any Newton step that would leave the open bracket is halved until it does not.

    The root is returned even when it lies outside [0, 1] (negative flash).
    Non-convergence is reported with a ConvergenceWarning and the last iterate
    is returned rather than raising.

    Input:
    zi: Feed mole fractions, summing to 1
    ki: Positive K-values of the respective molar species, straddling 1
    tol: Convergence tolerance on |dBeta| (default 1e-7)
    max_iter: Maximum Newton iterations (default 100)

    Output:
    RRResult with beta, iterations, status, last step and bracket bounds
    """
    zi, ki = validate_flash_inputs(zi, ki)
    beta_min, beta_max = rr_bracket(ki)

    beta = (beta_min + beta_max) / 2
    d_beta = np.inf
    status = rr_status.MAX_ITERATIONS
    N_it = 0

    while N_it < max_iter:
        N_it += 1
        f, df = rr_objective(zi, ki, beta)

        if df == 0 or not np.isfinite(df) or not np.isfinite(f):
            status = rr_status.ZERO_DERIVATIVE
            break

        d = f / df  # Newton step
        if not np.isfinite(d):  # df underflowed towards zero
            status = rr_status.ZERO_DERIVATIVE
            break

        # Keep beta inside the limits of f(beta)
        beta_new = beta - d
        while beta_new >= beta_max or beta_new <= beta_min:
            d = d / 2
            beta_new = beta - d

        d_beta = beta_new - beta
        beta = beta_new

        if abs(d_beta) <= tol:
            status = rr_status.CONVERGED
            break

    logger.debug("Rachford-Rice: beta = %.10g after %d iterations (%s)", beta, N_it, status.name)

    if status != rr_status.CONVERGED:
        warnings.warn(
            f"Rachford-Rice failed to converge in {N_it} iterations ({status.name})\n"
            f" dBeta = {d_beta}\n beta = {beta}\n beta_min = {beta_min}\n beta_max = {beta_max}",
            ConvergenceWarning,
            stacklevel=2,
        )

    return RRResult(beta=float(beta), iterations=N_it, status=status,
                    delta_beta=float(d_beta), beta_min=beta_min, beta_max=beta_max)

def solve_beta(
    zi: Union[npt.ArrayLike, list],
    ki: Union[npt.ArrayLike, list],
    tol: float = RR_TOL,
    max_iter: int = RR_MAX_ITR
) -> float:
    """
    Returns the vapor fraction that zeroes the Rachford-Rice equation.
    See rr_solve for the algorithm and the fuller result object.
    """
    return rr_solve(zi, ki, tol=tol, max_iter=max_iter).beta
