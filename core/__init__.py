"""
Core Domain Components.

Contains the relay's pure data structures, separated from HTTP handling
and from the Earth Engine integration.

Structure:
    models/: Pure data structures (no I/O)

Exports:
    models: Request, geometry and result models
"""

from . import models

__all__ = [
    'models',
]
