"""Dental X-ray analysis service backed by a hosted image classifier."""

__version__ = "0.1.0"
