"""
Pattern registry mapping language tags to extraction patterns and extensions.
"""

import logging
import re
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Optional

import yaml

from .models import DEFAULT_EXTENSIONS, DEFAULT_PATTERNS, PatternEntry

logger = logging.getLogger(__name__)


class PatternRegistry:
    """
    Immutable, ordered registry of language tags.

    Each tag owns one extraction pattern and one set of file extensions.
    Registries are never modified in place: merging caller entries over the
    defaults produces a new registry.

    Example:
        >>> registry = PatternRegistry.defaults().merged(
        ...     [PatternEntry.create("python", r"getenv[(]'([A-Z_]+)'[)]", [".py"])]
        ... )
        >>> registry.tag_for_extension(".py")
        'python'
    """

    def __init__(self, entries: Iterable[PatternEntry] = ()):
        self._entries: dict[str, PatternEntry] = {}
        for entry in entries:
            self._entries[entry.tag] = entry

    @classmethod
    def defaults(cls) -> "PatternRegistry":
        """Create a registry holding the built-in javascript, dotnet and flutter tags."""
        return cls(
            PatternEntry.create(tag, pattern, DEFAULT_EXTENSIONS[tag])
            for tag, pattern in DEFAULT_PATTERNS.items()
        )

    @classmethod
    def from_yaml(cls, config_path: Path | str) -> "PatternRegistry":
        """
        Create a registry from a YAML file of custom entries.

        Expected format:
            tag_name:
              pattern: 'regex with (capture)'
              extensions:
                - .ext1
                - .ext2

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file format is invalid
        """
        config_path = Path(config_path)
        content = config_path.read_text(encoding="utf-8")

        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            logger.error(f"Failed to parse patterns file: {e}")
            raise ValueError(f"Invalid YAML in patterns file: {e}") from e

        if data is None:
            return cls()

        if not isinstance(data, dict):
            raise ValueError(f"Invalid patterns file format: expected dict, got {type(data)}")

        entries = []
        for tag, item in data.items():
            if not isinstance(item, dict) or "pattern" not in item:
                raise ValueError(f"Invalid entry for {tag}: expected a mapping with 'pattern'")
            extensions = item.get("extensions") or []
            if not isinstance(extensions, list):
                raise ValueError(
                    f"Invalid extensions for {tag}: expected list, got {type(extensions)}"
                )
            entries.append(PatternEntry.create(str(tag), str(item["pattern"]), extensions))

        logger.debug(f"Loaded {len(entries)} pattern entries from {config_path}")
        return cls(entries)

    def merged(self, overrides: "PatternRegistry | Iterable[PatternEntry]") -> "PatternRegistry":
        """
        Return a new registry with override entries applied by tag.

        An override replaces the same-named entry entirely (pattern and
        extensions) and keeps its position; new tags are appended.
        """
        entries = dict(self._entries)
        for entry in overrides:
            entries[entry.tag] = entry
        return PatternRegistry(entries.values())

    def get(self, tag: str) -> Optional[PatternEntry]:
        """Get the entry for a tag, or None if not registered."""
        return self._entries.get(tag)

    def tag_for_extension(self, extension: str) -> Optional[str]:
        """
        Find the first tag, in registry order, claiming an extension.

        Args:
            extension: File extension including the dot; matched case-sensitively

        Returns:
            Tag name, or None if no entry claims the extension
        """
        for entry in self._entries.values():
            if entry.claims(extension):
                return entry.tag
        return None

    def entry_for_path(self, file_path: Path) -> Optional[PatternEntry]:
        """Get the entry responsible for a file, based on its suffix."""
        tag = self.tag_for_extension(file_path.suffix)
        return self._entries[tag] if tag is not None else None

    @property
    def tags(self) -> list[str]:
        return list(self._entries)

    def __iter__(self) -> Iterator[PatternEntry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, tag: object) -> bool:
        return tag in self._entries


def build_registry(
    custom_patterns: Optional[Mapping[str, "str | re.Pattern[str]"]] = None,
    custom_extensions: Optional[Mapping[str, Iterable[str]]] = None,
    base: Optional[PatternRegistry] = None,
) -> PatternRegistry:
    """
    Merge caller-supplied patterns and extensions over a base registry.

    A tag given in only one of the two mappings inherits the other half from
    the same-named base entry; the resulting entry then replaces the base
    entry entirely.

    Args:
        custom_patterns: Tag to regex (string or compiled)
        custom_extensions: Tag to extensions including the dot
        base: Registry to merge over. Defaults to the built-in registry.

    Raises:
        ValueError: If a tag ends up without a pattern
    """
    base = base if base is not None else PatternRegistry.defaults()
    custom_patterns = custom_patterns or {}
    custom_extensions = custom_extensions or {}

    overrides = []
    for tag in dict.fromkeys([*custom_patterns, *custom_extensions]):
        existing = base.get(tag)
        if tag in custom_patterns:
            pattern = custom_patterns[tag]
        elif existing is not None:
            pattern = existing.pattern
        else:
            raise ValueError(f"No pattern given for new tag: {tag}")

        if tag in custom_extensions:
            extensions = custom_extensions[tag]
        elif existing is not None:
            extensions = existing.extensions
        else:
            extensions = ()

        overrides.append(PatternEntry.create(tag, pattern, extensions))

    return base.merged(overrides)


# Global default registry instance
_default_registry = PatternRegistry.defaults()


def get_default_registry() -> PatternRegistry:
    """Get the built-in pattern registry."""
    return _default_registry
