"""Command-line interface module for XLIFF repair.

This module provides the xliff-repair tool for batch repair and reporting.
"""

from .main import main

__all__ = ["main"]
