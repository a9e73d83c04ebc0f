"""Infrastructure building blocks for service applications."""

__version__ = "0.1.0"