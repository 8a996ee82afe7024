from .shared_fns import convert_to_numpy, vector_norm
