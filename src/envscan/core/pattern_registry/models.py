"""
Data models and default tables for the pattern registry.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass

# Default extraction patterns per language tag; \w is ASCII-only
DEFAULT_PATTERNS: dict[str, str] = {
    "javascript": r'(?a)process\.env(?:\["([\w-]+)"\]|\.(\w+))',
    "dotnet": r'(?a)GetEnvironmentVariable\("([\w-]+)"\)',
    "flutter": r'(?a)String\.fromEnvironment\("([\w-]+)"\)',
}

# Default file extensions per language tag
DEFAULT_EXTENSIONS: dict[str, tuple[str, ...]] = {
    "javascript": (".js", ".jsx", ".ts", ".tsx"),
    "dotnet": (".cs",),
    "flutter": (".dart",),
}


def compile_pattern(pattern: "str | re.Pattern[str]", tag: str) -> "re.Pattern[str]":
    """
    Compile an extraction pattern and check it can yield a variable name.

    Raises:
        ValueError: If the pattern is not a valid regex or has no capturing group
    """
    if isinstance(pattern, re.Pattern):
        compiled = pattern
    else:
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise ValueError(f"Invalid pattern for {tag}: {e}") from e

    if compiled.groups < 1:
        raise ValueError(f"Pattern for {tag} has no capturing group: {compiled.pattern}")
    return compiled


@dataclass(frozen=True)
class PatternEntry:
    """
    One language tag with its extraction pattern and file extensions.

    Attributes:
        tag: Language/ecosystem label (e.g., 'javascript')
        pattern: Compiled regex; the first non-empty group of a match is the name
        extensions: Extensions including the dot, matched case-sensitively
    """

    tag: str
    pattern: "re.Pattern[str]"
    extensions: frozenset[str]

    @classmethod
    def create(
        cls, tag: str, pattern: "str | re.Pattern[str]", extensions
    ) -> "PatternEntry":
        """Build an entry from a raw pattern and any iterable of extensions."""
        if isinstance(extensions, str):
            extensions = [extensions]
        return cls(
            tag=tag,
            pattern=compile_pattern(pattern, tag),
            extensions=frozenset(str(ext) for ext in extensions),
        )

    def claims(self, extension: str) -> bool:
        """Check if this entry scans files with the given extension."""
        return extension in self.extensions

    def extract(self, text: str) -> Iterator[str]:
        """Yield the variable name of every non-overlapping match in text."""
        for match in self.pattern.finditer(text):
            name = next((group for group in match.groups() if group), None)
            if name:
                yield name
