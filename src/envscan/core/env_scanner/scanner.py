"""
EnvScanner implementation for recursive directory scanning.
"""

import logging
import stat
from collections.abc import Iterator
from pathlib import Path
from typing import Optional

from envscan.core.errors import FilesystemError
from envscan.core.pattern_registry import PatternEntry, PatternRegistry, get_default_registry

from .interfaces import EnvScannerInterface
from .models import ScanResult

logger = logging.getLogger(__name__)


class EnvScanner(EnvScannerInterface):
    """
    Concrete implementation of EnvScannerInterface.

    Walks the tree depth-first with an explicit stack, visiting directory
    entries in sorted name order so repeated scans of an unchanged tree give
    identical results.

    Known limitations:
    - No ignore list: dependency and build directories are scanned too
    - Symlinks are followed without cycle detection; a cycle ends in an
      OSError (path too long / too many links) raised as FilesystemError
    """

    def __init__(self, registry: Optional[PatternRegistry] = None, debug: bool = False):
        """
        Initialize the EnvScanner.

        Args:
            registry: Pattern registry to classify and scan files with.
                      If None, uses the built-in default registry.
            debug: Log every matching file and every discovered name.
        """
        self._registry = registry if registry is not None else get_default_registry()
        self._debug = debug

    @property
    def registry(self) -> PatternRegistry:
        return self._registry

    def scan(self, root_path: Path) -> ScanResult:
        """
        Recursively scan a directory and collect referenced variable names.

        Args:
            root_path: Root directory to scan

        Returns:
            ScanResult with names in first-seen order

        Raises:
            FilesystemError: If the root or any entry below it cannot be read
        """
        root_path = Path(root_path)
        if not stat.S_ISDIR(self._stat_mode(root_path)):
            raise FilesystemError(f"Root path is not a directory: {root_path}", path=root_path)

        first_seen: dict[str, Path] = {}
        files_scanned = 0
        pending: list[Path] = [root_path]

        while pending:
            current = pending.pop()
            mode = self._stat_mode(current)

            if stat.S_ISDIR(mode):
                # Reversed so the smallest name is popped first
                pending.extend(reversed(self._list_directory(current)))
                continue

            entry = self._registry.entry_for_path(current)
            if entry is None or not stat.S_ISREG(mode):
                continue

            files_scanned += 1
            for name in self._scan_file(current, entry):
                first_seen.setdefault(name, current)

        logger.debug(
            f"Scanned {files_scanned} files under {root_path}, found {len(first_seen)} variables"
        )
        return ScanResult(
            variables=tuple(first_seen),
            files_scanned=files_scanned,
            first_seen=first_seen,
        )

    def _stat_mode(self, path: Path) -> int:
        # Path.stat follows symlinks, so a dangling link fails here
        try:
            return path.stat().st_mode
        except OSError as e:
            raise FilesystemError(f"Cannot access {path} - {e}", path=path) from e

    def _list_directory(self, directory: Path) -> list[Path]:
        try:
            return sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise FilesystemError(f"Cannot read directory {directory} - {e}", path=directory) from e

    def _scan_file(self, file_path: Path, entry: PatternEntry) -> Iterator[str]:
        """
        Apply a tag's pattern to a single file.

        Args:
            file_path: Path to the file to scan
            entry: Registry entry claiming the file's extension

        Yields:
            Variable names in match order, duplicates included
        """
        if self._debug:
            logger.debug(f"Checking file ({entry.tag}): {file_path}")

        try:
            content = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise FilesystemError(f"Cannot read file {file_path} - {e}", path=file_path) from e

        for name in entry.extract(content):
            if self._debug:
                logger.debug(f"Environment variable found: {name}")
            yield name
