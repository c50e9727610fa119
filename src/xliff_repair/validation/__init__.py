"""Validation layer for XLIFF repair."""

from .wellformed import EMPTY_FILE_MESSAGE, WellFormedness, check_well_formed

__all__ = [
    "EMPTY_FILE_MESSAGE",
    "WellFormedness",
    "check_well_formed",
]
