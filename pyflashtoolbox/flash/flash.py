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
from typing import Union, List, Tuple, Callable, Optional

import numpy as np
import numpy.typing as npt
import pandas as pd
from tabulate import tabulate
from scipy.optimize import anderson, newton_krylov, NoConvergence

from pyflashtoolbox.classes import phase, flash_method, worst_status, RRResult, FlashResult, RRDomainError, ConvergenceWarning
from pyflashtoolbox.constants import RR_TOL, RR_MAX_ITR, FLASH_ABSTOL, FLASH_MAX_ITR, ASS_MEMORY
from pyflashtoolbox.shared_fns import convert_to_numpy, vector_norm
from pyflashtoolbox.validate import validate_methods, validate_flash_inputs, validate_composition
from pyflashtoolbox.rachford_rice import rr_solve, phase_compositions
from pyflashtoolbox.kvalues import wilson_k

logger = logging.getLogger(__name__)

def fugacity_coefficients(model, p: float, T: float, composition: np.ndarray, phase_type: phase) -> np.ndarray:
    """
    Queries the thermodynamic model for fugacity coefficients of one phase.
    model may expose fugacity_coefficient(p, T, composition, phase), or be a
    callable with that same signature.
    """
    if hasattr(model, 'fugacity_coefficient'):
        phi = model.fugacity_coefficient(p, T, composition, phase_type)
    elif callable(model):
        phi = model(p, T, composition, phase_type)
    else:
        raise TypeError(f"Model {model!r} does not provide fugacity_coefficient(p, T, composition, phase)")
    phi = convert_to_numpy(phi)
    if len(phi) != len(composition):
        raise ValueError(f"Model returned {len(phi)} {phase_type.name.lower()} fugacity coefficients "
                         f"for {len(composition)} components")
    if not np.all(np.isfinite(phi)) or np.any(phi <= 0):
        raise ValueError(f"Model returned non-positive {phase_type.name.lower()} fugacity coefficients: {phi}")
    return phi

def update_k_factors(model, p: float, T: float, x: np.ndarray, y: np.ndarray) -> np.ndarray:
    """
    Returns new K-values from the fugacity coefficient ratio
        Ki = phi_i^L(p, T, x) / phi_i^V(p, T, y)
    """
    phi_L = fugacity_coefficients(model, p, T, x, phase.LIQUID)
    phi_V = fugacity_coefficients(model, p, T, y, phase.VAPOR)
    return phi_L / phi_V

def phase_split(
    zi: np.ndarray,
    ki: np.ndarray,
    rr_tol: float = RR_TOL,
    rr_max_iter: int = RR_MAX_ITR
) -> Tuple[float, np.ndarray, np.ndarray, RRResult]:
    """
    Solves Rachford-Rice for the given K-values, then splits the feed by material balance.
    Returns (beta, xi, yi, RRResult)
    """
    rr = rr_solve(zi, ki, tol=rr_tol, max_iter=rr_max_iter)
    xi, yi = phase_compositions(zi, ki, rr.beta)
    return rr.beta, xi, yi, rr

def _substitute(model, p, T, zi, ki, maxiters, abstol, rr_tol, rr_max_iter):
    """
    Plain successive substitution, K <- phi_L(x) / phi_V(y).
    Returns (K, k_norm, history, statuses, last, collapsed_k) where last is the
    most recent (K, beta, x, y) that admitted a Rachford-Rice root, and collapsed_k
    the K-values that stopped admitting one (None otherwise).
    """
    iters = 0
    k_norm = np.inf
    history, statuses = [], []
    last, collapsed_k = None, None
    while k_norm > abstol and iters < maxiters:
        try:
            beta, xi, yi, rr = phase_split(zi, ki, rr_tol, rr_max_iter)
        except RRDomainError:
            if last is None:
                raise
            collapsed_k = ki
            break
        statuses.append(rr.status)
        last = (ki, beta, xi, yi)
        k_new = update_k_factors(model, p, T, xi, yi)
        k_norm = vector_norm(k_new, ki)
        ki = k_new
        iters += 1
        history.append(k_norm)
        logger.debug("Flash iteration %d: beta = %.10g, |dK| = %.3e", iters, beta, k_norm)
    return ki, k_norm, history, statuses, last, collapsed_k

def _accelerate(model, p, T, zi, ki, method, maxiters, abstol, rr_tol, rr_max_iter):
    """
    Solves log10(phi_L(x) / phi_V(y)) - log10(K) = 0 with scipy's Anderson mixing
    (ASS) or Newton-Krylov (NEWTON). A unit Anderson step from an empty memory is
    the successive substitution step. Same return signature as _substitute, with
    the residual measured in log10(K).
    """
    history, statuses, accepted, tried = [], [], [], []
    f0 = []

    def residual(lnk):
        k = 10.0 ** lnk
        tried.append(k)
        beta, xi, yi, rr = phase_split(zi, k, rr_tol, rr_max_iter)
        statuses.append(rr.status)
        f = np.log10(update_k_factors(model, p, T, xi, yi)) - lnk
        if not f0:
            f0.append(float(np.linalg.norm(f)))
        return f

    def record(lnk, f):
        accepted.append(np.array(lnk, dtype=float))
        history.append(float(np.linalg.norm(f)))
        logger.debug("Flash %s iteration %d: |dlog10K| = %.3e", method.name, len(history), history[-1])

    lnk0 = np.log10(ki)
    solver_kwargs = dict(f_tol=abstol, maxiter=maxiters, tol_norm=np.linalg.norm, callback=record)
    last, collapsed_k = None, None
    try:
        if method == flash_method.ASS:
            lnk = anderson(residual, lnk0, alpha=1.0, M=ASS_MEMORY, **solver_kwargs)
        else:
            lnk = newton_krylov(residual, lnk0, **solver_kwargs)
    except NoConvergence as e:
        lnk = np.asarray(e.args[0], dtype=float)
    except RRDomainError:
        if not f0:
            raise
        collapsed_k = tried[-1]
        # Every accepted point was evaluated, so it admits a split
        lnk = accepted[-1] if accepted else lnk0
        beta, xi, yi, rr = phase_split(zi, 10.0 ** lnk, rr_tol, rr_max_iter)
        last = (10.0 ** lnk, beta, xi, yi)

    k_norm = history[-1] if history else (f0[0] if f0 else np.inf)
    return 10.0 ** np.asarray(lnk, dtype=float), k_norm, history, statuses, last, collapsed_k

def _flash_result(zi, ki, k_norm, history, statuses, last, collapsed_k, method, abstol, rr_tol, rr_max_iter):
    """
    Recomputes (beta, x, y) from the final K and reports how the iteration ended.
    When the final K no longer straddles 1, the last consistent split is returned instead.
    """
    if collapsed_k is None:
        try:
            beta, xi, yi, rr = phase_split(zi, ki, rr_tol, rr_max_iter)
        except RRDomainError:
            if last is None:
                raise
            collapsed_k = ki
        else:
            statuses.append(rr.status)
            last = (ki, beta, xi, yi)

    iters = len(history)
    converged = collapsed_k is None and k_norm <= abstol
    if collapsed_k is not None:
        warnings.warn(
            f"K-values no longer straddle 1 after {iters} iterations, returning the last two-phase estimate\n"
            f" |dK| = {k_norm}\n K = {collapsed_k}",
            ConvergenceWarning,
            stacklevel=3,
        )
    elif not converged:
        warnings.warn(
            f"Flash did not converge in {iters} iterations\n |dK| = {k_norm}\n K = {ki}",
            ConvergenceWarning,
            stacklevel=3,
        )

    ki, beta, xi, yi = last
    return FlashResult(beta=beta, x=xi, y=yi, K=ki, iterations=iters, k_norm=float(k_norm),
                       converged=bool(converged), status=worst_status(statuses),
                       history=np.array(history, dtype=float), method=method)

def flash(
    model,
    p: float,
    T: float,
    z: Union[npt.ArrayLike, List[float]],
    K0: Union[npt.ArrayLike, List[float]],
    maxiters: int = FLASH_MAX_ITR,
    abstol: float = FLASH_ABSTOL,
    rr_tol: float = RR_TOL,
    rr_max_iter: int = RR_MAX_ITR,
    method: Union[flash_method, str] = flash_method.SS
) -> FlashResult:
    """
    Isothermal two-phase flash by successive substitution of K-values.

    Each iteration solves Rachford-Rice for beta at the current K, splits the feed
    into liquid (x) and vapor (y) compositions, and updates K = phi_L(x) / phi_V(y)
    from the model. Iteration stops once ||K_new - K||_2 <= abstol or after maxiters.
    The returned beta, x and y are always recomputed from the final K.

    Successive substitution converges linearly, and slowly near critical conditions.
    method = 'ASS' (Anderson accelerated) or 'NEWTON' (Newton-Krylov) instead solve
    the fixed point in log10(K) with scipy.optimize, and abstol then applies to
    ||log10(K_new) - log10(K)||_2.

    Poor initial K-values may converge to the trivial solution (all K -> 1, x = y),
    which is NOT detected here. Check result.K and result.beta before relying on a split.
    If an updated K stops straddling 1, a ConvergenceWarning is issued and the last
    split that had a Rachford-Rice root is returned with converged = False.

    model: Thermodynamic model exposing fugacity_coefficient(p, T, composition, phase)
    p: Pressure, in the model's units
    T: Temperature, in the model's units
    z: Feed mole fractions, summing to 1
    K0: Initial K-value estimate, e.g. from wilson_k
    maxiters: Maximum outer iterations (default 100)
    abstol: Tolerance on the norm of the K-value update (default 1e-7)
    rr_tol: Rachford-Rice step tolerance (default 1e-7)
    rr_max_iter: Rachford-Rice maximum iterations (default 100)
    method: flash_method or string, 'SS' (default), 'ASS' or 'NEWTON'

    Returns FlashResult, which unpacks as (beta, x, y). Non-convergence issues a
    ConvergenceWarning and returns the last estimate with converged = False.
    Raises RRDomainError only when K0 itself does not straddle 1.
    """
    zi, ki = validate_flash_inputs(z, K0)
    method = validate_methods(['flashmethod'], [method])

    if method == flash_method.SS:
        state = _substitute(model, p, T, zi, ki, maxiters, abstol, rr_tol, rr_max_iter)
    else:
        state = _accelerate(model, p, T, zi, ki, method, maxiters, abstol, rr_tol, rr_max_iter)
    return _flash_result(zi, *state, method, abstol, rr_tol, rr_max_iter)

def flash_wilson(
    model,
    p: float,
    T: float,
    z: Union[npt.ArrayLike, List[float]],
    tc: Union[npt.ArrayLike, List[float]],
    pc: Union[npt.ArrayLike, List[float]],
    omega: Union[npt.ArrayLike, List[float]],
    **kwargs
) -> FlashResult:
    """
    Flash initialized from Wilson correlation K-values.
    tc, pc, omega: Critical temperatures, pressures and acentric factors (units consistent with T and p)
    Additional keyword arguments are passed to flash.
    """
    return flash(model, p, T, z, wilson_k(p, T, tc, pc, omega), **kwargs)

def flash_grid(
    model,
    pressures: Union[npt.ArrayLike, List[float]],
    temperatures: Union[npt.ArrayLike, List[float]],
    z: Union[npt.ArrayLike, List[float]],
    k0_fn: Callable[[float, float], npt.ArrayLike],
    **kwargs
) -> pd.DataFrame:
    """
    Runs an independent flash at every (p, T) combination and tabulates the results.

    k0_fn: Function returning the initial K-values for a given (p, T)
    Additional keyword arguments are passed to flash.

    Returns a DataFrame with one row per (p, T) and columns
    p, T, beta, iterations, k_norm, converged, x1..xn, y1..yn.
    Conditions where the K-values do not straddle 1 (no Rachford-Rice root) are
    reported with NaN beta and compositions, and converged = False.
    """
    zi = validate_composition(z)
    nc = len(zi)
    rows = []
    for p in convert_to_numpy(pressures):
        for T in convert_to_numpy(temperatures):
            row = {'p': p, 'T': T}
            try:
                result = flash(model, p, T, zi, k0_fn(p, T), **kwargs)
            except RRDomainError as e:
                logger.debug("No two-phase split at p = %g, T = %g: %s", p, T, e)
                row.update({'beta': np.nan, 'iterations': 0, 'k_norm': np.nan, 'converged': False})
                row.update({f'x{i + 1}': np.nan for i in range(nc)})
                row.update({f'y{i + 1}': np.nan for i in range(nc)})
            else:
                row.update({'beta': result.beta, 'iterations': result.iterations,
                            'k_norm': result.k_norm, 'converged': result.converged})
                row.update({f'x{i + 1}': result.x[i] for i in range(nc)})
                row.update({f'y{i + 1}': result.y[i] for i in range(nc)})
            rows.append(row)
    return pd.DataFrame(rows)

def flash_summary(result: FlashResult, names: Optional[List[str]] = None, silent: bool = False) -> pd.DataFrame:
    """
    Tabulates liquid, vapor compositions and K-values per component.
    names: Optional component names (defaults to 1..n)
    silent: True returns the DataFrame only, False also prints it to the terminal
    """
    nc = len(result.x)
    if names is None:
        names = [str(i + 1) for i in range(nc)]
    if len(names) != nc:
        raise ValueError(f"Expected {nc} component names, got {len(names)}")

    df = pd.DataFrame()
    df['Component'] = names
    df['x'] = result.x
    df['y'] = result.y
    df['K'] = result.K

    if not silent:
        status = 'Converged' if result.converged else 'NOT converged'
        print(f"Vapor fraction = {result.beta:.6f} ({status} in {result.iterations} iterations, |dK| = {result.k_norm:.2e})")
        print(tabulate(df.set_index('Component'), headers=['Component', 'x', 'y', 'K']), "\n")
    return df
