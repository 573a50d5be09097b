"""
Services Layer - Check and scan entry points, repository staging.
"""

from envscan.services.check_service import (
    check_env_variables,
    get_environments,
    scan_project,
)
from envscan.services.git_staging import (
    clone_repository,
    find_env_source,
    resolve_project_dir,
    staged_repository,
)

__all__ = [
    # Entry points
    "check_env_variables",
    "get_environments",
    "scan_project",
    # Git staging
    "clone_repository",
    "staged_repository",
    "resolve_project_dir",
    "find_env_source",
]
