"""Minimal file-sharing HTTP service."""

__version__ = "1.0.0"
