from .kvalues import wilson_k, IdealSolutionModel
