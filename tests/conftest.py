import logging

import pytest

from shellenv import dotenv, launch, shell_env
from shellenv.environ import MemoryEnvironment
from shellenv.errors import ShellEnvError


class FakeExecutor:
    """Stands in for SubprocessExecutor; records every invocation."""

    def __init__(self, output: str = "", error: ShellEnvError = None):
        self.output = output
        self.error = error
        self.invocations = []

    def execute(self, invocation):
        self.invocations.append(invocation)
        if self.error is not None:
            raise self.error
        return self.output


@pytest.fixture
def fake_executor():
    return FakeExecutor


@pytest.fixture
def gui_env() -> MemoryEnvironment:
    """Environment of an app launched from the Dock."""
    return MemoryEnvironment(
        {
            "HOME": "/Users/ada",
            "USER": "ada",
            "SHELL": "/bin/zsh",
            "TMPDIR": "/var/folders/xy/T/",
            "PATH": "/usr/bin:/bin:/usr/sbin:/sbin",
        }
    )


@pytest.fixture(autouse=True)
def _reset_loggers():
    yield
    for module_logger in (shell_env.logger, dotenv.logger, launch.logger):
        module_logger.configure(logging.INFO)
