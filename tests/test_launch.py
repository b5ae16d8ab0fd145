"""Tests for the command line entry point."""

import logging
import os

import pytest
from rich.console import Console

from shellenv import bootstrap_environment, launch
from shellenv.config import LoaderConfig, ShellEnvConfig
from shellenv.environ import MemoryEnvironment
from shellenv.launch import build_config, main, parse_args


def _console() -> Console:
    return Console(record=True, width=200, color_system=None)


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.delenv(ShellEnvConfig.DEV_SERVER_MARKER, raising=False)
    monkeypatch.setenv("HOME", "/Users/ada")
    monkeypatch.setenv("PATH", "/usr/bin:/bin")


class TestParseArgs:
    def test_default_command(self) -> None:
        args = parse_args([])
        assert args.command is None
        assert build_config(args) == LoaderConfig()

    def test_shell_options(self) -> None:
        args = parse_args(["shell", "--force", "--shell", "/bin/bash", "--timeout", "2"])
        assert build_config(args) == LoaderConfig(shell="/bin/bash", timeout=2.0, force=True)

    def test_dotenv_dir(self, tmp_path) -> None:
        args = parse_args(["dotenv", "--dir", str(tmp_path)])
        assert build_config(args).dotenv_dir == tmp_path

    def test_unknown_command_exits(self) -> None:
        with pytest.raises(SystemExit) as excinfo:
            parse_args(["bogus"])
        assert excinfo.value.code == 2


class TestMain:
    def test_show(self, clean_env) -> None:
        console = _console()
        assert main(["show"], console=console) == 0
        assert "2 PATH entries" in console.export_text()

    def test_shell_dry_run_leaves_process_env_alone(self, clean_env) -> None:
        console = _console()
        rc = main(["shell", "--dry-run", "--force", "--shell", "/nonexistent/shell"], console=console)
        assert rc == 0
        assert os.environ["PATH"] == "/usr/bin:/bin"
        text = console.export_text()
        assert "PATH" in text
        assert "/opt/homebrew/bin" in text

    def test_shell_failure_falls_back_on_process_env(self, clean_env) -> None:
        rc = main(["shell", "--force", "--shell", "/nonexistent/shell"], console=_console())
        assert rc == 0
        assert os.environ["PATH"].startswith("/opt/homebrew/bin:")
        assert os.environ["PATH"].endswith(":/usr/bin:/bin")

    def test_dotenv_dry_run(self, clean_env, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv(ShellEnvConfig.DEV_SERVER_MARKER, "http://localhost:5173")
        monkeypatch.delenv("SHELLENV_FROM_FILE", raising=False)
        (tmp_path / ".env").write_text("SHELLENV_FROM_FILE=1\n")
        console = _console()
        assert main(["dotenv", "--dry-run", "--dir", str(tmp_path)], console=console) == 0
        assert "SHELLENV_FROM_FILE" in console.export_text()
        assert "SHELLENV_FROM_FILE" not in os.environ

    def test_dotenv_writes_process_env(self, clean_env, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv(ShellEnvConfig.DEV_SERVER_MARKER, "http://localhost:5173")
        # Empty counts as unset, and monkeypatch restores the variable afterwards
        monkeypatch.setenv("SHELLENV_FROM_FILE", "")
        (tmp_path / ".env").write_text("SHELLENV_FROM_FILE=loaded\n")
        assert main(["dotenv", "--dir", str(tmp_path)], console=_console()) == 0
        assert os.environ["SHELLENV_FROM_FILE"] == "loaded"


class TestBootstrapEnvironment:
    def test_dev_session_only_runs_dotenv(self, tmp_path) -> None:
        env = MemoryEnvironment({ShellEnvConfig.DEV_SERVER_MARKER: "http://localhost:5173", "PATH": "/bin"})
        (tmp_path / ".env").write_text("FOO=bar\nPATH=/nope\n")
        bootstrap_environment(env, LoaderConfig(dotenv_dir=tmp_path))
        assert env.get("FOO") == "bar"
        assert env.get("PATH") == "/bin"


class TestLogFile:
    def test_unwritable_log_file_falls_back_to_console(self, clean_env, tmp_path, caplog) -> None:
        log_file = tmp_path / "missing-dir" / "shellenv.log"
        with caplog.at_level(logging.WARNING):
            rc = main(["--log-file", str(log_file), "show"], console=_console())
        assert rc == 0
        assert not log_file.exists()
        assert "cannot write log file" in caplog.text
        assert all(
            not isinstance(handler, logging.FileHandler)
            for handler in launch.logger.logger.handlers
        )
