from .flash import fugacity_coefficients, update_k_factors, phase_split, flash, flash_wilson, flash_grid, flash_summary
