#!/usr/bin/env python3

from pathlib import Path
from typing import Optional

import argparse
from rich.console import Console

from shellenv import dotenv, shell_env
from shellenv.config import LoaderConfig, ShellEnvConfig
from shellenv.dotenv import DotEnvLoader
from shellenv.environ import EnvironmentTable, MemoryEnvironment, ProcessEnvironment
from shellenv.logging import Logger
from shellenv.report import diff_environments, render_changes, render_path
from shellenv.shell_env import ShellEnvironmentLoader

logger = Logger(__name__)


def parse_args(argv: Optional[list] = None):
    parser = argparse.ArgumentParser(
        prog="shellenv",
        description="Load the login shell environment and .env file into a GUI-launched process",
    )
    parser.add_argument("--log-level", default="INFO", help="log level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--log-file", help="also write log records to this file")
    sub = parser.add_subparsers(dest="command", help="sub-command to run")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--force", action="store_true", help="run even where the loader would normally be skipped")
    common.add_argument("--dry-run", action="store_true", help="print what would change without touching the environment")

    shell_opts = argparse.ArgumentParser(add_help=False)
    shell_opts.add_argument("--shell", help="shell to invoke (default: $SHELL or %s)" % ShellEnvConfig.DEFAULT_SHELL)
    shell_opts.add_argument(
        "--timeout",
        type=float,
        default=ShellEnvConfig.SHELL_TIMEOUT,
        help="seconds to wait for the shell (default: %(default)s)",
    )

    dotenv_opts = argparse.ArgumentParser(add_help=False)
    dotenv_opts.add_argument("--dir", type=Path, help="directory holding the .env file (default: cwd)")

    sub.add_parser("shell", parents=[common, shell_opts], help="load the login shell environment")
    sub.add_parser("dotenv", parents=[common, dotenv_opts], help="load the .env file")
    sub.add_parser("all", parents=[common, shell_opts, dotenv_opts], help="run shell then dotenv (default)")
    sub.add_parser("show", help="show PATH entries of the current environment")

    return parser.parse_args(argv)


def build_config(args) -> LoaderConfig:
    return LoaderConfig(
        shell=getattr(args, "shell", None),
        timeout=getattr(args, "timeout", ShellEnvConfig.SHELL_TIMEOUT),
        force=getattr(args, "force", False),
        dotenv_dir=getattr(args, "dir", None),
    )


def configure_logging(level: str, log_file: Optional[str]) -> None:
    loggers = (logger, shell_env.logger, dotenv.logger)
    try:
        for module_logger in loggers:
            module_logger.configure(level, log_file)
    except OSError as e:
        for module_logger in loggers:
            module_logger.configure(level)
        logger.warning("cannot write log file %s, logging to console only: %s", log_file, e)


def run_loaders(command: str, env: EnvironmentTable, config: LoaderConfig) -> None:
    if command in ("shell", "all"):
        ShellEnvironmentLoader(env=env, config=config).load()
    if command in ("dotenv", "all"):
        DotEnvLoader(env=env, config=config).load()


def main(argv: Optional[list] = None, console: Optional[Console] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file)
    console = console or Console()

    command = args.command or "all"
    real_env = ProcessEnvironment()

    if command == "show":
        render_path(real_env.get("PATH"), console, total=len(real_env))
        return 0

    config = build_config(args)
    if getattr(args, "dry_run", False):
        before = real_env.snapshot()
        scratch = MemoryEnvironment(before)
        run_loaders(command, scratch, config)
        render_changes(diff_environments(before, scratch.snapshot()), console)
        return 0

    run_loaders(command, real_env, config)
    logger.info("environment bootstrap finished (%s)", command)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
