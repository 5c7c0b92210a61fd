"""Conic trajectory viewer: orbital parameters in, annotated drawable scene out."""

__version__ = "0.1.0"
