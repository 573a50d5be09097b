"""
Pattern registry module for envscan.

Maps language tags to the regular expression that extracts environment
variable names and to the file extensions that pattern applies to.
"""

from .models import DEFAULT_EXTENSIONS, DEFAULT_PATTERNS, PatternEntry
from .registry import PatternRegistry, build_registry, get_default_registry

__all__ = [
    # Main classes
    "PatternEntry",
    "PatternRegistry",
    # Factories
    "build_registry",
    "get_default_registry",
    # Constants
    "DEFAULT_PATTERNS",
    "DEFAULT_EXTENSIONS",
]
