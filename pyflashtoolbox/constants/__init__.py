from .constants import RR_TOL, RR_MAX_ITR, FLASH_ABSTOL, FLASH_MAX_ITR, ASS_MEMORY, SUM_TOL, WILSON_COEFF
