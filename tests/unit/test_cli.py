"""
Integration tests for CLI commands.

Tests the basic functionality of CLI commands and error handling.
"""

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from envscan.cli import app

runner = CliRunner()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    (project_dir / "app.js").write_text(
        "process.env.PORT;\nprocess.env.SECRET_KEY;\n", encoding="utf-8"
    )
    return project_dir


def fake_clone(files: dict[str, str]):
    def run(command, **kwargs):
        target = Path(command[-1])
        target.mkdir(parents=True)
        for rel_path, content in files.items():
            (target / rel_path).write_text(content, encoding="utf-8")
        return subprocess.CompletedProcess(command, 0, stdout="", stderr="")

    return run


class TestCLIHelp:
    """Test CLI help and usage information."""

    def test_main_help(self):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("check", "scan", "check-git", "scan-git", "config"):
            assert command in result.output

    def test_check_help(self):
        result = runner.invoke(app, ["check", "--help"])

        assert result.exit_code == 0
        assert "--debug" in result.output
        assert "--patterns" in result.output


class TestCheckCommand:
    def test_all_declared(self, project: Path, tmp_path: Path):
        env_file = tmp_path / "app.env"
        env_file.write_text("PORT=80\nSECRET_KEY=x\n", encoding="utf-8")

        result = runner.invoke(app, ["check", str(env_file), str(project)])

        assert result.exit_code == 0
        assert "All environment variables are declared correctly." in result.output

    def test_missing_variable_exits_non_zero(self, project: Path, tmp_path: Path):
        env_file = tmp_path / "app.env"
        env_file.write_text("PORT=80\n", encoding="utf-8")

        result = runner.invoke(app, ["check", str(env_file), str(project)])

        assert result.exit_code == 1
        assert "SECRET_KEY is not declared" in result.output

    def test_unsupported_source(self, project: Path, tmp_path: Path):
        env_file = tmp_path / "app.yaml"
        env_file.write_text("PORT: 80\n", encoding="utf-8")

        result = runner.invoke(app, ["check", str(env_file), str(project)])

        assert result.exit_code == 1
        assert "Unsupported declaration source extension: .yaml" in result.output

    def test_missing_declaration_file(self, project: Path, tmp_path: Path):
        result = runner.invoke(app, ["check", str(tmp_path / "none.env"), str(project)])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_custom_patterns_file(self, project: Path, tmp_path: Path):
        (project / "worker.py").write_text('os.getenv("QUEUE_URL")', encoding="utf-8")
        patterns = tmp_path / "patterns.yaml"
        patterns.write_text(
            "python:\n  pattern: 'getenv\\(\"(\\w+)\"\\)'\n  extensions: [.py]\n",
            encoding="utf-8",
        )
        env_file = tmp_path / "app.env"
        env_file.write_text("PORT=80\nSECRET_KEY=x\n", encoding="utf-8")

        result = runner.invoke(
            app, ["check", str(env_file), str(project), "--patterns", str(patterns)]
        )

        assert result.exit_code == 1
        assert "QUEUE_URL is not declared" in result.output


class TestScanCommand:
    def test_plain_output(self, project: Path):
        result = runner.invoke(app, ["scan", str(project), "--plain"])

        assert result.exit_code == 0
        assert result.output.split() == ["PORT", "SECRET_KEY"]

    def test_table_output(self, project: Path):
        result = runner.invoke(app, ["scan", str(project)])

        assert result.exit_code == 0
        assert "PORT" in result.output
        assert "app.js" in result.output

    def test_missing_directory(self, tmp_path: Path):
        result = runner.invoke(app, ["scan", str(tmp_path / "absent")])

        assert result.exit_code == 1

    def test_unknown_config_key(self, project: Path, tmp_path: Path):
        config_file = tmp_path / "envscan.yaml"
        config_file.write_text("scan:\n  bogus: 1\n", encoding="utf-8")

        result = runner.invoke(app, ["scan", str(project), "--config", str(config_file)])

        assert result.exit_code == 1
        assert "bogus" in result.output


class TestGitCommands:
    def test_check_git(self):
        files = {"index.js": "process.env.API_URL;", ".env": "API_URL=https://api\n"}
        with patch(
            "envscan.services.git_staging.subprocess.run", side_effect=fake_clone(files)
        ) as run:
            result = runner.invoke(app, ["check-git", "https://example.com/r.git"])

        assert result.exit_code == 0
        assert "All environment variables are declared correctly." in result.output
        assert run.call_args.args[0][:4] == ["git", "clone", "--branch", "main"]

    def test_check_git_missing_env_file(self):
        with patch(
            "envscan.services.git_staging.subprocess.run",
            side_effect=fake_clone({"index.js": "process.env.API_URL;"}),
        ):
            result = runner.invoke(app, ["check-git", "https://example.com/r.git"])

        assert result.exit_code == 1
        assert "No env source file found" in result.output

    def test_scan_git_uses_default_branch(self):
        with patch(
            "envscan.services.git_staging.subprocess.run",
            side_effect=fake_clone({"index.js": "process.env.API_URL;"}),
        ) as run:
            result = runner.invoke(app, ["scan-git", "https://example.com/r.git", "--plain"])

        assert result.exit_code == 0
        assert result.output.split() == ["API_URL"]
        assert "--branch" not in run.call_args.args[0]

    def test_clone_failure(self):
        error = subprocess.CalledProcessError(128, ["git"], stderr="fatal: not found")
        with patch("envscan.services.git_staging.subprocess.run", side_effect=error):
            result = runner.invoke(app, ["scan-git", "https://example.com/r.git"])

        assert result.exit_code == 1
        assert "fatal: not found" in result.output


class TestConfigCommand:
    def test_shows_effective_config(self, monkeypatch):
        monkeypatch.setenv("ENVSCAN_GIT_DEFAULT_BRANCH", "trunk")

        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "default_branch" in result.output
        assert "trunk" in result.output
