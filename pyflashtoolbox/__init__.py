"""
pyflashtoolbox
===================================

------------------------------------------------------
Isothermal two-phase flash by successive substitution
------------------------------------------------------

Given a feed composition and an initial set of K-values, these functions find the
vapor fraction and the liquid and vapor compositions of a two-phase split, iterating
the K-values against an external fugacity coefficient model until they are consistent.

Note: Functions live in submodules, requiring seperate imports

Includes functions to;

- Solve the Rachford-Rice equation with a step-limited Newton method (rachford_rice)
- Run successive substitution, Anderson or Newton flashes against any fugacity model (flash)
- Tabulate flash results and sweep flashes over pressure / temperature grids (flash)
- Estimate initial K-values with the Wilson correlation (kvalues)

Any model exposing fugacity_coefficient(p, T, composition, phase) can be flashed,
where phase is pyflashtoolbox.classes.phase.LIQUID or .VAPOR.

"""

submodules = [
    'classes',
    'constants',
    'flash',
    'kvalues',
    'rachford_rice',
    'shared_fns',
    'validate'
]

__all__ = submodules 

import importlib

def __dir__():
    return __all__


def __getattr__(name):
    if name in submodules:
        return importlib.import_module(f'pyflashtoolbox.{name}')
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(
                f"Module 'pyflashtoolbox' has no attribute '{name}'"
            )
