"""Arcade game of herding and combining coloured shapes by drawing loops around them."""

__version__ = "0.1.0"
__all__ = ["__version__"]