"""Exception types for envscan."""

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from envscan.core.reconciler import ReconcileResult


class EnvScanError(Exception):
    """Base exception for envscan errors."""

    pass


class UnsupportedSourceError(EnvScanError):
    """Declaration file has an extension that no loader understands."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Unsupported declaration source extension: {extension or '<none>'}")


class InvalidSourceError(EnvScanError):
    """Declaration input is neither a file path nor a mapping, or its content is malformed."""

    pass


class FilesystemError(EnvScanError):
    """A file or directory could not be read.

    Raised for a missing declaration file and for any unreadable entry met
    while scanning. The scan is aborted; no partial result is returned.
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)


class MissingDeclarationsError(EnvScanError):
    """Variables referenced in the project are absent from the declarations."""

    def __init__(self, result: "ReconcileResult"):
        self.result = result
        self.missing = list(result.missing)
        super().__init__(f"Undeclared environment variables: {', '.join(self.missing)}")


class GitCloneError(EnvScanError):
    """Cloning a repository into the staging directory failed."""

    pass
