"""
CLI for envscan.

Provides command-line interface for scanning projects for environment
variable references and checking them against declarations.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.syntax import Syntax

from envscan.cli.ui import render_error, render_info, render_plain, render_variables
from envscan.core.config import EnvScanConfig, configure_logging, load_config
from envscan.core.errors import EnvScanError, MissingDeclarationsError
from envscan.core.pattern_registry import PatternRegistry, get_default_registry
from envscan.services import (
    check_env_variables,
    find_env_source,
    scan_project,
    staged_repository,
)

# Initialize Rich Console
console = Console()

app = typer.Typer(
    name="envscan",
    help="Environment variable scanner - find undeclared environment variables in a codebase",
    add_completion=False,
)

_DEBUG_HELP = "Log every scanned file and discovered variable"
_PATTERNS_HELP = "YAML file of custom pattern entries merged over the built-in tags"
_CONFIG_HELP = "Configuration file (.yaml, .yml or .json)"


def _prepare(
    config_path: Optional[Path], debug: bool, patterns_path: Optional[Path]
) -> tuple[EnvScanConfig, bool, PatternRegistry]:
    """
    Load configuration, set up logging and build the base pattern registry.

    Returns:
        Tuple of (config, effective debug flag, registry)
    """
    cfg = load_config(config_path)
    debug = debug or cfg.scan.debug
    configure_logging(cfg.logging, debug=debug)

    registry = get_default_registry()
    patterns_file = patterns_path or cfg.scan.patterns_file
    if patterns_file:
        registry = registry.merged(PatternRegistry.from_yaml(patterns_file))
    return cfg, debug, registry


def _fail(message: str) -> typer.Exit:
    render_error(message, console)
    return typer.Exit(1)


@app.command()
def check(
    env_file: Path = typer.Argument(..., help="Declaration file (.env or .json)"),
    project_dir: Path = typer.Argument(Path("."), help="Project directory to scan"),
    debug: bool = typer.Option(False, "--debug", "-d", help=_DEBUG_HELP),
    patterns: Optional[Path] = typer.Option(None, "--patterns", "-p", help=_PATTERNS_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=_CONFIG_HELP),
):
    """Check that every environment variable used in a project is declared."""
    try:
        _, debug, registry = _prepare(config, debug, patterns)
        check_env_variables(
            str(env_file), project_dir, debug=debug, registry=registry, console=console
        )
    except MissingDeclarationsError:
        raise typer.Exit(1)
    except (EnvScanError, ValueError, OSError) as e:
        raise _fail(str(e))


@app.command()
def scan(
    project_dir: Path = typer.Argument(Path("."), help="Project directory to scan"),
    plain: bool = typer.Option(False, "--plain", help="Print one variable name per line"),
    debug: bool = typer.Option(False, "--debug", "-d", help=_DEBUG_HELP),
    patterns: Optional[Path] = typer.Option(None, "--patterns", "-p", help=_PATTERNS_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=_CONFIG_HELP),
):
    """List the environment variables used in a project."""
    try:
        _, debug, registry = _prepare(config, debug, patterns)
        result = scan_project(project_dir, debug=debug, registry=registry)
    except (EnvScanError, ValueError, OSError) as e:
        raise _fail(str(e))

    if plain:
        render_plain(result, console)
    else:
        render_variables(result, project_dir, console)


@app.command("check-git")
def check_git(
    repo_url: str = typer.Argument(..., help="Repository URL to clone"),
    branch: Optional[str] = typer.Option(
        None, "--branch", "-b", help="Branch to check out (default: git.default_branch)"
    ),
    env_file: str = typer.Option(
        ".env", "--env-file", "-e", help="Declaration file, relative to the project path"
    ),
    project_path: Optional[str] = typer.Option(
        None, "--project-path", help="Project directory inside the repository"
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help=_DEBUG_HELP),
    patterns: Optional[Path] = typer.Option(None, "--patterns", "-p", help=_PATTERNS_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=_CONFIG_HELP),
):
    """Clone a repository and check its environment variable declarations."""
    try:
        cfg, debug, registry = _prepare(config, debug, patterns)
        actual_branch = branch or cfg.git.default_branch
        render_info(f"Cloning {repo_url} (branch: {actual_branch})", console)

        with staged_repository(
            repo_url,
            branch=actual_branch,
            subpath=project_path,
            git_executable=cfg.git.executable,
            temp_prefix=cfg.git.temp_prefix,
        ) as project_dir:
            env_source = find_env_source(project_dir, env_file)
            render_info(f"Found env source file: {env_file}", console)
            check_env_variables(
                str(env_source), project_dir, debug=debug, registry=registry, console=console
            )
    except MissingDeclarationsError:
        raise typer.Exit(1)
    except (EnvScanError, ValueError, OSError) as e:
        raise _fail(str(e))


@app.command("scan-git")
def scan_git(
    repo_url: str = typer.Argument(..., help="Repository URL to clone"),
    branch: Optional[str] = typer.Option(
        None, "--branch", "-b", help="Branch to check out (default: repository default branch)"
    ),
    project_path: Optional[str] = typer.Option(
        None, "--project-path", help="Project directory inside the repository"
    ),
    plain: bool = typer.Option(False, "--plain", help="Print one variable name per line"),
    debug: bool = typer.Option(False, "--debug", "-d", help=_DEBUG_HELP),
    patterns: Optional[Path] = typer.Option(None, "--patterns", "-p", help=_PATTERNS_HELP),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=_CONFIG_HELP),
):
    """Clone a repository and list the environment variables it uses."""
    try:
        cfg, debug, registry = _prepare(config, debug, patterns)
        if not plain:
            render_info(f"Cloning {repo_url}", console)

        with staged_repository(
            repo_url,
            branch=branch,
            subpath=project_path,
            git_executable=cfg.git.executable,
            temp_prefix=cfg.git.temp_prefix,
        ) as project_dir:
            result = scan_project(project_dir, debug=debug, registry=registry)
            if plain:
                render_plain(result, console)
            else:
                render_variables(result, project_dir, console)
    except (EnvScanError, ValueError, OSError) as e:
        raise _fail(str(e))


@app.command("config")
def show_config(
    config: Optional[Path] = typer.Option(None, "--config", "-c", help=_CONFIG_HELP),
):
    """Show the effective configuration."""
    try:
        cfg = load_config(config)
    except (ValueError, OSError) as e:
        raise _fail(str(e))

    console.print(Syntax(cfg.to_yaml(), "yaml", theme="monokai"))


if __name__ == "__main__":
    app()
