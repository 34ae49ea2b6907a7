"""Clanboard: reporting backend for a game-clan management dashboard."""

__version__ = "0.1.0"
__author__ = "Clanboard Team"

__all__ = ["__version__", "__author__"]
