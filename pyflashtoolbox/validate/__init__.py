from .validate import validate_methods, validate_composition, validate_kvalues, validate_flash_inputs
