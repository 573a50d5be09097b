"""
Abstract interfaces for environment variable scanning.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from .models import ScanResult


class EnvScannerInterface(ABC):
    """
    Abstract interface for scanning a project tree for variable references.

    Implementations classify files by extension and extract names with the
    pattern registered for that extension.
    """

    @abstractmethod
    def scan(self, root_path: Path) -> ScanResult:
        """
        Recursively scan a directory and collect referenced variable names.

        Args:
            root_path: Root directory to scan

        Returns:
            ScanResult with names in first-seen order

        Notes:
            - Skips files whose extension no tag claims
            - Aborts on the first unreadable file or directory
        """
        pass
