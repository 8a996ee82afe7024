from .rachford_rice import rr_objective, rr_bracket, rr_solve, solve_beta, phase_compositions
