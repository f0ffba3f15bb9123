"""
Command-line interface for object-builder.

Provides commands for assembling and checking package descriptors.
"""

from .main import app, main

__all__ = ["main", "app"]
