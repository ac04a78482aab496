"""Pulse Journal: trade journal analytics."""

__version__ = "0.1.0"
