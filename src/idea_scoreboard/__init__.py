"""Peer-review score aggregation for idea issues."""

__version__ = "0.1.0"
