"""
Data models for the environment variable scanner.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ScanResult:
    """
    Variables found while scanning a project tree.

    Attributes:
        variables: Unique variable names in the order they were first found
        files_scanned: Number of files a pattern was applied to
        first_seen: Variable name to the file it was first found in
    """

    variables: tuple[str, ...] = ()
    files_scanned: int = 0
    first_seen: dict[str, Path] = field(default_factory=dict)

    def __contains__(self, name: object) -> bool:
        return name in self.first_seen

    def __len__(self) -> int:
        return len(self.variables)
