"""
Core Layer - Declaration loading, pattern registry, scanning and reconciliation.
"""

from envscan.core.config import (
    EnvScanConfig,
    GitConfig,
    LoggingConfig,
    ScanConfig,
    configure_logging,
    load_config,
)
from envscan.core.declarations import (
    DeclarationSource,
    describe_source,
    load_declarations,
)
from envscan.core.env_scanner import EnvScanner, EnvScannerInterface, ScanResult
from envscan.core.errors import (
    EnvScanError,
    FilesystemError,
    GitCloneError,
    InvalidSourceError,
    MissingDeclarationsError,
    UnsupportedSourceError,
)
from envscan.core.pattern_registry import (
    PatternEntry,
    PatternRegistry,
    build_registry,
    get_default_registry,
)
from envscan.core.reconciler import ReconcileResult, reconcile, render_report

__all__ = [
    # Config
    "EnvScanConfig",
    "ScanConfig",
    "GitConfig",
    "LoggingConfig",
    "load_config",
    "configure_logging",
    # Declarations
    "DeclarationSource",
    "load_declarations",
    "describe_source",
    # Pattern registry
    "PatternEntry",
    "PatternRegistry",
    "build_registry",
    "get_default_registry",
    # Scanner
    "EnvScanner",
    "EnvScannerInterface",
    "ScanResult",
    # Reconciler
    "ReconcileResult",
    "reconcile",
    "render_report",
    # Errors
    "EnvScanError",
    "UnsupportedSourceError",
    "InvalidSourceError",
    "FilesystemError",
    "MissingDeclarationsError",
    "GitCloneError",
]
