"""Aura Board: peer-approved recognition points for groups."""

__version__ = "0.3.0"
