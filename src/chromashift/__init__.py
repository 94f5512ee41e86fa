"""Chromatic Shift: a row/column color-cycling puzzle engine."""

__version__ = "0.1.0"
