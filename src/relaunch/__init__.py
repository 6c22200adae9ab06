"""Relaunch - self-updating application launcher."""

__version__ = "1.0.0"
