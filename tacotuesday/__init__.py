"""Taco Tuesday — restaurant reviews API."""

__version__ = "1.0.0"
