"""Diamond-square terrain generation."""

__version__ = "0.1.0"
