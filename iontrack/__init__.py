"""Building blocks for Monte-Carlo ion transport and radiation damage simulations."""

__version__ = "0.1.0"

__all__ = [
    "errfmt",
    "arrays",
    "corteo",
    "geometry",
    "tally",
    "straggling",
    "damage",
]