"""API routes package.

This package contains all API route handlers for the application.
"""
from . import board
from . import solve
from . import generate
from . import levels

__all__ = [
    "board",
    "solve",
    "generate",
    "levels",
]
