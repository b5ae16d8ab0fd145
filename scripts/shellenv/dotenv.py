"""Load ``KEY=VALUE`` pairs from a ``.env`` file in the working directory.

Only used for source/dev runs (the dev-server marker is set). Values that
already exist in the environment always win over the file.
"""

from pathlib import Path
from typing import Iterator, Optional, Tuple

from shellenv.config import LoaderConfig, ShellEnvConfig
from shellenv.environ import EnvironmentTable, ProcessEnvironment
from shellenv.logging import Logger

logger = Logger(__name__, tag="dotenv")

QUOTES = ('"', "'")


def strip_quotes(value: str) -> str:
    """Remove one surrounding pair of matching quotes; no escape handling.

    A value that repeats its quote character inside (``'a'b'``) is not a
    single quoted string and is returned as-is.
    """
    if len(value) >= 2 and value[0] in QUOTES and value[-1] == value[0]:
        inner = value[1:-1]
        if value[0] not in inner:
            return inner
    return value


def parse_dotenv(content: str) -> Iterator[Tuple[str, str]]:
    for line in content.split("\n"):
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue

        eq = trimmed.find("=")
        if eq <= 0:
            continue

        key = trimmed[:eq].strip()
        value = strip_quotes(trimmed[eq + 1:].strip())
        yield key, value


class DotEnvLoader:
    def __init__(self, env: Optional[EnvironmentTable] = None, config: Optional[LoaderConfig] = None):
        self.env = env if env is not None else ProcessEnvironment()
        self.config = config or LoaderConfig()
        self.loaded_count = 0

    @property
    def path(self) -> Path:
        return self.config.resolve_dotenv_path()

    def load(self) -> None:
        self.loaded_count = 0

        if not self.config.force and not self.env.get(ShellEnvConfig.DEV_SERVER_MARKER):
            return

        try:
            env_path = self.path
            if not env_path.is_file():
                logger.info("No .env file found at %s", env_path)
                return

            content = env_path.read_text(encoding="utf-8")
            for key, value in parse_dotenv(content):
                # Empty values count as unset
                if not self.env.get(key):
                    self.env.set(key, value)
                    self.loaded_count += 1
        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.warning("Failed to load .env file: %s", e)
            return

        logger.info("Loaded %d variables from .env", self.loaded_count)


def load_dotenv(env: Optional[EnvironmentTable] = None, config: Optional[LoaderConfig] = None) -> None:
    DotEnvLoader(env=env, config=config).load()
