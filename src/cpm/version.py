"""Version information for cpm."""

__version__ = "0.1.0"
