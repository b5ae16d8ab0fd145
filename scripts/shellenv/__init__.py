"""Recover the login shell environment for GUI-launched processes.

Typical startup use::

    from shellenv import bootstrap_environment

    bootstrap_environment()  # before spawning anything that needs PATH tools

Both loaders mutate process-wide state without locking; call them once,
from a single thread, during startup.
"""

from typing import Optional

from shellenv.config import LoaderConfig, ShellEnvConfig
from shellenv.dotenv import DotEnvLoader, load_dotenv
from shellenv.environ import EnvironmentTable, MemoryEnvironment, ProcessEnvironment
from shellenv.shell_env import ShellEnvironmentLoader, load_shell_env


def bootstrap_environment(env: Optional[EnvironmentTable] = None, config: Optional[LoaderConfig] = None) -> None:
    env = env if env is not None else ProcessEnvironment()
    ShellEnvironmentLoader(env=env, config=config).load()
    DotEnvLoader(env=env, config=config).load()


__all__ = [
    "DotEnvLoader",
    "EnvironmentTable",
    "LoaderConfig",
    "MemoryEnvironment",
    "ProcessEnvironment",
    "ShellEnvConfig",
    "ShellEnvironmentLoader",
    "bootstrap_environment",
    "load_dotenv",
    "load_shell_env",
]
