"""Fleet placement engine for a grid-based naval strategy game."""

__version__ = "0.4.0"
