"""Reverse image search task runner."""

__version__ = "0.1.0"
