"""
Git staging helpers.

Clones a remote repository into a temporary directory so it can be scanned,
and removes the directory again whatever the outcome.
"""

import logging
import subprocess
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from envscan.core.errors import FilesystemError, GitCloneError

logger = logging.getLogger(__name__)

# Name of the clone inside the staging directory
_CLONE_DIR_NAME = "repo"


def clone_repository(
    repo_url: str,
    target_dir: Path,
    branch: Optional[str] = None,
    git_executable: str = "git",
) -> Path:
    """
    Clone a repository with the git CLI.

    Args:
        repo_url: URL or local path of the repository
        target_dir: Directory to clone into; must not exist or be empty
        branch: Branch to check out. If None, uses the remote default branch.
        git_executable: git binary to run

    Returns:
        The target directory

    Raises:
        GitCloneError: If git is unavailable or the clone fails
    """
    command = [git_executable, "clone"]
    if branch:
        command += ["--branch", branch]
    command += [repo_url, str(target_dir)]

    logger.info(f"Cloning repository: {repo_url}" + (f", branch: {branch}" if branch else ""))
    try:
        subprocess.run(command, check=True, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise GitCloneError(f"git executable not found: {git_executable}") from e
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or f"exit code {e.returncode}"
        raise GitCloneError(f"Failed to clone {repo_url}: {detail}") from e

    return target_dir


def resolve_project_dir(clone_root: Path, subpath: Optional[str] = None) -> Path:
    """
    Resolve the project directory inside a clone.

    Raises:
        FilesystemError: If the subpath escapes the clone or is not a directory
    """
    if not subpath:
        return clone_root

    root = clone_root.resolve()
    project_dir = (root / subpath).resolve()
    if not project_dir.is_relative_to(root):
        raise FilesystemError(f"Project path escapes the repository: {subpath}", path=project_dir)
    if not project_dir.is_dir():
        raise FilesystemError(
            f"Project path not found in repository: {subpath}", path=project_dir
        )
    return project_dir


@contextmanager
def staged_repository(
    repo_url: str,
    branch: Optional[str] = None,
    subpath: Optional[str] = None,
    git_executable: str = "git",
    temp_prefix: str = "envscan-",
) -> Iterator[Path]:
    """
    Clone a repository into a temporary directory for the duration of a block.

    The temporary directory is removed on exit, including when the clone or
    the body of the block raises.

    Args:
        repo_url: URL or local path of the repository
        branch: Branch to check out. If None, uses the remote default branch.
        subpath: Project directory relative to the repository root
        git_executable: git binary to run
        temp_prefix: Prefix of the temporary directory name

    Yields:
        The project directory inside the clone
    """
    with tempfile.TemporaryDirectory(prefix=temp_prefix, ignore_cleanup_errors=True) as tmpdir:
        clone_root = clone_repository(
            repo_url, Path(tmpdir) / _CLONE_DIR_NAME, branch=branch, git_executable=git_executable
        )
        try:
            yield resolve_project_dir(clone_root, subpath)
        finally:
            logger.debug(f"Removing staging directory: {tmpdir}")


def find_env_source(project_dir: Path, env_file: str) -> Path:
    """
    Locate the declaration file inside a project.

    Raises:
        FilesystemError: If the file does not exist
    """
    file_path = Path(project_dir) / env_file
    if not file_path.is_file():
        raise FilesystemError(f"No env source file found: {env_file}", path=file_path)
    return file_path
