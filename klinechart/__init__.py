"""K-line chart indicator engine."""

__version__ = "0.1.0"
