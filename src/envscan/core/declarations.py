"""
Declaration loading for envscan.

Turns a declared-variables source (dotenv file, JSON document, ECS task
definition or an in-memory mapping) into a flat, read-only mapping of
variable names to values.
"""

import fnmatch
import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any, Union

from dotenv import dotenv_values

from envscan.core.errors import FilesystemError, InvalidSourceError, UnsupportedSourceError

logger = logging.getLogger(__name__)

DeclarationSource = Union[str, os.PathLike, Mapping[str, Any]]

# Base names treated as container task definitions
TASKDEF_NAME_PATTERN = "*taskdef.json"

MAPPING_SOURCE_LABEL = "the provided mapping"


def _is_path_source(source: object) -> bool:
    return isinstance(source, (str, os.PathLike))


def _source_extension(path: Path) -> str:
    # A bare ".env" has no suffix as far as pathlib is concerned
    if path.name == ".env":
        return ".env"
    return path.suffix


def describe_source(source: DeclarationSource) -> str:
    """Label a declaration source for human-readable reports."""
    if _is_path_source(source):
        return os.fspath(source)
    return MAPPING_SOURCE_LABEL


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise FilesystemError(f"Cannot read declaration file: {path} - {e}", path=path) from e


def _load_dotenv_file(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise FilesystemError(f"Declaration file not found: {path}", path=path)
    try:
        return dict(dotenv_values(dotenv_path=path, encoding="utf-8"))
    except OSError as e:
        raise FilesystemError(f"Cannot read declaration file: {path} - {e}", path=path) from e


def _entry_name(item: Any) -> str:
    if not isinstance(item, dict) or not item.get("name"):
        raise InvalidSourceError(f"Task definition entry without a name: {item!r}")
    return item["name"]


def _entry_list(container: dict[str, Any], key: str) -> list[Any]:
    entries = container.get(key) or []
    if not isinstance(entries, list):
        raise InvalidSourceError(
            f"Task definition '{key}' must be a list, got {type(entries).__name__}"
        )
    return entries


def _load_task_definition(document: dict[str, Any]) -> dict[str, Any] | None:
    """
    Extract declarations from the first container of an ECS task definition.

    Returns None when the document has no container definitions, in which
    case the caller falls back to the document's top-level keys.
    """
    containers = document.get("containerDefinitions")
    if not isinstance(containers, list) or not containers:
        return None

    container = containers[0] or {}
    if not isinstance(container, dict):
        raise InvalidSourceError(
            f"Container definition must be an object, got {type(container).__name__}"
        )

    variables: dict[str, Any] = {}
    for item in _entry_list(container, "environment"):
        variables[_entry_name(item)] = item.get("value")
    # Secrets override plain environment entries of the same name
    for item in _entry_list(container, "secrets"):
        variables[_entry_name(item)] = item.get("valueFrom")
    return variables


def _load_json_file(path: Path) -> dict[str, Any]:
    content = _read_text(path)
    try:
        document = json.loads(content)
    except json.JSONDecodeError as e:
        raise InvalidSourceError(f"Malformed JSON in declaration file {path}: {e}") from e

    if not isinstance(document, dict):
        raise InvalidSourceError(
            f"Declaration document must be a JSON object, got {type(document).__name__}: {path}"
        )

    if fnmatch.fnmatch(path.name, TASKDEF_NAME_PATTERN):
        task_variables = _load_task_definition(document)
        if task_variables is not None:
            logger.debug(f"Loaded task definition declarations from {path}")
            return task_variables

    return document


def load_declarations(source: DeclarationSource) -> Mapping[str, Any]:
    """
    Load declared environment variables from a file or a mapping.

    Args:
        source: Path to a ``.env`` or ``.json`` file, or a mapping of names to values.

    Returns:
        Read-only mapping of variable names to declared values.

    Raises:
        UnsupportedSourceError: If the file extension is not ``.env`` or ``.json``
        InvalidSourceError: If the source is neither a path nor a mapping,
            or a JSON document is malformed
        FilesystemError: If the declaration file is missing or unreadable
    """
    if _is_path_source(source):
        path = Path(source)
        extension = _source_extension(path)
        if extension == ".env":
            variables = _load_dotenv_file(path)
        elif extension == ".json":
            variables = _load_json_file(path)
        else:
            raise UnsupportedSourceError(extension)
    elif isinstance(source, Mapping):
        variables = dict(source)
    else:
        raise InvalidSourceError(
            "Invalid declaration source: expected a path to a .env/.json file or a mapping, "
            f"got {type(source).__name__}"
        )

    logger.debug(f"Loaded {len(variables)} declared variables from {describe_source(source)}")
    return MappingProxyType(variables)
