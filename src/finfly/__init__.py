"""Finfly: personal finance tracker backend."""

__version__ = "0.1.0"
