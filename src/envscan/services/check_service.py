"""
Entry points combining declaration loading, scanning and reconciliation.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Optional

from rich.console import Console

from envscan.core.declarations import DeclarationSource, describe_source, load_declarations
from envscan.core.env_scanner import EnvScanner, ScanResult
from envscan.core.errors import MissingDeclarationsError
from envscan.core.pattern_registry import PatternRegistry, build_registry
from envscan.core.reconciler import ReconcileResult, reconcile, render_report

logger = logging.getLogger(__name__)

CustomPatterns = Optional[Mapping[str, "str | re.Pattern[str]"]]
CustomExtensions = Optional[Mapping[str, Iterable[str]]]


def scan_project(
    project_dir: Path | str = ".",
    debug: bool = False,
    custom_patterns: CustomPatterns = None,
    custom_extensions: CustomExtensions = None,
    registry: Optional[PatternRegistry] = None,
) -> ScanResult:
    """
    Scan a project with the default registry plus any caller entries.

    Args:
        project_dir: Root directory of the project
        debug: Log every matching file and discovered name
        custom_patterns: Tag to regex, merged over the defaults
        custom_extensions: Tag to extensions, merged over the defaults
        registry: Base registry to merge over instead of the built-in one

    Returns:
        ScanResult for the project tree
    """
    merged = build_registry(custom_patterns, custom_extensions, base=registry)
    if debug:
        logger.debug(f"Scanning project directory: {project_dir} (tags: {', '.join(merged.tags)})")
    return EnvScanner(merged, debug=debug).scan(Path(project_dir))


def get_environments(
    project_dir: Path | str = ".",
    debug: bool = False,
    custom_patterns: CustomPatterns = None,
    custom_extensions: CustomExtensions = None,
    registry: Optional[PatternRegistry] = None,
) -> list[str]:
    """
    List the environment variables referenced in a project.

    Never fails on undeclared variables; there are no declarations to check.

    Returns:
        Unique variable names in the order they were first found
    """
    result = scan_project(project_dir, debug, custom_patterns, custom_extensions, registry)
    return list(result.variables)


def check_env_variables(
    declaration_source: DeclarationSource,
    project_dir: Path | str = ".",
    debug: bool = False,
    custom_patterns: CustomPatterns = None,
    custom_extensions: CustomExtensions = None,
    registry: Optional[PatternRegistry] = None,
    console: Optional[Console] = None,
) -> ReconcileResult:
    """
    Check that every variable referenced in a project is declared.

    Declarations are loaded before the scan starts, so an unsupported or
    invalid source fails without touching the project tree.

    Args:
        declaration_source: Path to a .env/.json file, or a mapping
        project_dir: Root directory of the project
        debug: Log loading and scanning details
        custom_patterns: Tag to regex, merged over the defaults
        custom_extensions: Tag to extensions, merged over the defaults
        registry: Base registry to merge over instead of the built-in one
        console: Rich Console for the report. Defaults to stdout.

    Returns:
        ReconcileResult when every found variable is declared

    Raises:
        MissingDeclarationsError: If any found variable is undeclared
        UnsupportedSourceError: If the declaration file extension is unknown
        InvalidSourceError: If the declaration source is invalid
        FilesystemError: If a file or directory cannot be read
    """
    console = console or Console()
    source_label = describe_source(declaration_source)

    if debug:
        logger.debug(f"Declaration source: {source_label}")
        logger.debug(f"Project directory: {project_dir}")

    declared = load_declarations(declaration_source)
    if debug:
        logger.debug(f"Declared variables loaded: {', '.join(declared) or '<none>'}")

    scan_result = scan_project(project_dir, debug, custom_patterns, custom_extensions, registry)
    result = reconcile(declared, scan_result.variables)

    render_report(result, source_label, console)
    if not result.ok:
        raise MissingDeclarationsError(result)
    return result
