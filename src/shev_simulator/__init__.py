"""Backward quasi-static series hybrid-electric vehicle powertrain model."""

__version__ = "0.1.0"
