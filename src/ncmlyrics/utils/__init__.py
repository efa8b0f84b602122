"""Utility modules."""

from .logging import setup_logging
from .validation import validate_roots

__all__ = [
    "setup_logging",
    "validate_roots",
]
