"""
Unit tests for EnvScanner.

Tests traversal order, extension classification, debug logging and
filesystem error handling.
"""

import logging
import os
import sys
from pathlib import Path

import pytest

from envscan.core.env_scanner import EnvScanner
from envscan.core.errors import FilesystemError
from envscan.core.pattern_registry import PatternEntry, PatternRegistry, build_registry


def create_tree(root: Path, files: dict[str, str]) -> None:
    """Write files given as relative path -> content."""
    for rel_path, content in files.items():
        file_path = root / rel_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")


class TestScanning:
    """Test variable discovery."""

    def test_finds_member_and_index_access(self, tmp_path: Path):
        create_tree(tmp_path, {"index.js": 'process.env.FOO;\nprocess.env["BAR"];\n'})

        result = EnvScanner().scan(tmp_path)

        assert result.variables == ("FOO", "BAR")
        assert result.files_scanned == 1

    def test_all_default_languages(self, tmp_path: Path):
        create_tree(
            tmp_path,
            {
                "api/Program.cs": 'Environment.GetEnvironmentVariable("DB_URL");',
                "app/lib/main.dart": 'String.fromEnvironment("FLAVOR");',
                "web/src/App.tsx": "const k = process.env.REACT_APP_KEY;",
            },
        )

        result = EnvScanner().scan(tmp_path)

        assert set(result.variables) == {"DB_URL", "FLAVOR", "REACT_APP_KEY"}
        assert result.files_scanned == 3

    def test_names_are_deduplicated_in_first_seen_order(self, tmp_path: Path):
        create_tree(
            tmp_path,
            {
                "a.js": "process.env.B; process.env.A;",
                "b.js": "process.env.A; process.env.C;",
            },
        )

        result = EnvScanner().scan(tmp_path)

        assert result.variables == ("B", "A", "C")
        assert result.first_seen["A"] == tmp_path / "a.js"
        assert result.first_seen["C"] == tmp_path / "b.js"

    def test_depth_first_sorted_traversal(self, tmp_path: Path):
        create_tree(
            tmp_path,
            {
                "b/inner.js": "process.env.FROM_B_INNER;",
                "a.js": "process.env.FROM_A;",
                "c.js": "process.env.FROM_C;",
                "b/z/deep.js": "process.env.FROM_B_DEEP;",
            },
        )

        result = EnvScanner().scan(tmp_path)

        assert result.variables == ("FROM_A", "FROM_B_INNER", "FROM_B_DEEP", "FROM_C")

    def test_unmatched_extensions_are_skipped(self, tmp_path: Path):
        create_tree(
            tmp_path,
            {
                "notes.md": "process.env.IN_DOCS",
                "script.py": "process.env.IN_PYTHON",
                "upper.JS": "process.env.UPPER_CASE_EXT",
            },
        )

        result = EnvScanner().scan(tmp_path)

        assert result.variables == ()
        assert result.files_scanned == 0

    def test_dependency_directories_are_not_ignored(self, tmp_path: Path):
        create_tree(tmp_path, {"node_modules/lib/index.js": "process.env.FROM_DEPENDENCY;"})

        assert EnvScanner().scan(tmp_path).variables == ("FROM_DEPENDENCY",)

    def test_first_tag_claiming_extension_is_used(self, tmp_path: Path):
        registry = PatternRegistry.defaults().merged(
            [PatternEntry.create("other", r"ENV\[(\w+)\]", [".js"])]
        )
        create_tree(tmp_path, {"a.js": "process.env.JS_STYLE; ENV[OTHER_STYLE]"})

        assert EnvScanner(registry).scan(tmp_path).variables == ("JS_STYLE",)

    def test_replaced_default_tag_stops_scanning_old_extension(self, tmp_path: Path):
        registry = build_registry(
            {"javascript": r"process\.env\.(\w+)"}, {"javascript": [".mjs"]}
        )
        create_tree(
            tmp_path,
            {"old.js": "process.env.OLD;", "new.mjs": "process.env.NEW;"},
        )

        assert EnvScanner(registry).scan(tmp_path).variables == ("NEW",)

    def test_undecodable_bytes_do_not_abort(self, tmp_path: Path):
        (tmp_path / "bin.js").write_bytes(b"\xff\xfe process.env.AFTER_GARBAGE")

        assert EnvScanner().scan(tmp_path).variables == ("AFTER_GARBAGE",)

    def test_scan_is_idempotent(self, tmp_path: Path):
        create_tree(
            tmp_path,
            {
                "x/a.ts": "process.env.ONE; process.env.TWO;",
                "y/b.cs": 'GetEnvironmentVariable("THREE")',
            },
        )
        scanner = EnvScanner()

        assert scanner.scan(tmp_path) == scanner.scan(tmp_path)


class TestDebugLogging:
    """Test the debug observability channel."""

    def test_debug_logs_files_and_names(self, tmp_path: Path, caplog):
        create_tree(tmp_path, {"a.js": "process.env.LOGGED;"})

        with caplog.at_level(logging.DEBUG, logger="envscan"):
            result = EnvScanner(debug=True).scan(tmp_path)

        assert result.variables == ("LOGGED",)
        assert "a.js" in caplog.text
        assert "Environment variable found: LOGGED" in caplog.text

    def test_no_per_file_logs_without_debug(self, tmp_path: Path, caplog):
        create_tree(tmp_path, {"a.js": "process.env.QUIET;"})

        with caplog.at_level(logging.DEBUG, logger="envscan"):
            result = EnvScanner(debug=False).scan(tmp_path)

        assert result.variables == ("QUIET",)
        assert "Environment variable found" not in caplog.text


class TestFilesystemErrors:
    """Test that unreadable entries abort the scan."""

    def test_missing_root(self, tmp_path: Path):
        with pytest.raises(FilesystemError):
            EnvScanner().scan(tmp_path / "absent")

    def test_root_is_a_file(self, tmp_path: Path):
        file_path = tmp_path / "a.js"
        file_path.write_text("process.env.X", encoding="utf-8")

        with pytest.raises(FilesystemError):
            EnvScanner().scan(file_path)

    @pytest.mark.skipif(sys.platform == "win32", reason="Symlinks need privileges on Windows")
    def test_broken_symlink_aborts(self, tmp_path: Path):
        create_tree(tmp_path, {"a.js": "process.env.X"})
        (tmp_path / "dangling.js").symlink_to(tmp_path / "missing.js")

        with pytest.raises(FilesystemError) as exc_info:
            EnvScanner().scan(tmp_path)

        assert exc_info.value.path == tmp_path / "dangling.js"

    @pytest.mark.skipif(
        sys.platform == "win32" or (hasattr(os, "geteuid") and os.geteuid() == 0),
        reason="Permission bits are not enforced on Windows or for root",
    )
    def test_unreadable_file_aborts(self, tmp_path: Path):
        create_tree(tmp_path, {"secret.js": "process.env.X"})
        secret = tmp_path / "secret.js"
        secret.chmod(0)
        try:
            with pytest.raises(FilesystemError):
                EnvScanner().scan(tmp_path)
        finally:
            secret.chmod(0o644)
