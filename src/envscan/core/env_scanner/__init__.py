"""
EnvScanner module for envscan.

Provides recursive directory scanning that extracts referenced environment
variable names using the pattern registered for each file extension.
"""

from .interfaces import EnvScannerInterface
from .models import ScanResult
from .scanner import EnvScanner

__all__ = [
    "EnvScanner",
    "EnvScannerInterface",
    "ScanResult",
]
