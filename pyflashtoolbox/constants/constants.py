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


# Rachford-Rice (inner) Newton iteration
RR_TOL = 1e-7  # Convergence tolerance on the vapor fraction step |dBeta|
RR_MAX_ITR = 100  # Maximum Newton iterations

# Successive substitution (outer) loop
FLASH_ABSTOL = 1e-7  # Convergence tolerance on ||K_new - K||_2
FLASH_MAX_ITR = 100  # Maximum substitution iterations
ASS_MEMORY = 5  # Previous iterates mixed by accelerated (Anderson) substitution

SUM_TOL = 1e-6  # Allowed deviation of a feed composition sum from unity

WILSON_COEFF = 5.373  # Wilson K-value correlation constant
