"""Internal implementation package; import public names from ``spatia``."""
