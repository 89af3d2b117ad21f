"""Experiment session API with signed external links."""

__version__ = "1.0.0"
