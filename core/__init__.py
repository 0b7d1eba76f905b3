"""
Core Domain Components.

Structure:
    models/: Pure data structures (no business logic)
    errors.py: Error codes, retry classification, HTTP status mapping
"""

from . import models

__all__ = ['models']
