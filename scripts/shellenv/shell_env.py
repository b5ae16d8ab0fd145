"""Shell environment loader.

Apps launched from Finder/Dock on macOS inherit launchd's minimal
environment (PATH=/usr/bin:/bin:/usr/sbin:/sbin), so tools installed by
Homebrew, nvm, pyenv, cargo and friends are invisible to them. This module
spawns the user's login + interactive shell once, reads back the
environment it ends up with, and merges it into the current process.

Call ``load_shell_env()`` early during startup, before anything that needs
PATH-resolved tools is started. It never raises: on failure it prepends a
list of well-known install directories to PATH instead.

Not thread-safe; see ``shellenv.environ``.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple

from shellenv.config import LoaderConfig, ShellEnvConfig
from shellenv.environ import EnvironmentTable, ProcessEnvironment
from shellenv.errors import MarkerNotFoundError, ShellEnvError
from shellenv.executor import ShellInvocation, SubprocessExecutor
from shellenv.logging import Logger
from shellenv.platform_utils import PlatformDetector

logger = Logger(__name__, tag="shell-env")

PATH_SEPARATOR = ":"


def skip_dev_server_vars(key: str) -> bool:
    return key.startswith(ShellEnvConfig.DEV_SERVER_PREFIX)


def extract_env_section(output: str, marker: str = ShellEnvConfig.ENV_MARKER) -> str:
    """Return the text after the first *marker*, dropping shell startup noise.

    Raises:
        MarkerNotFoundError: If the marker never appears in *output*.

    """
    _, found, tail = output.partition(marker)
    if not found:
        raise MarkerNotFoundError(f"marker {marker!r} not found in shell output")
    return tail


def parse_env_lines(section: str) -> Iterator[Tuple[str, str]]:
    """Yield (key, value) for every ``KEY=VALUE`` line of *section*.

    Lines without ``=``, or starting with it, are skipped. Values keep any
    further ``=`` characters.
    """
    for line in section.strip().split("\n"):
        eq = line.find("=")
        if eq > 0:
            yield line[:eq], line[eq + 1:]


def merge_path(entries: Iterable[str], current_path: str) -> str:
    """Prepend *entries* to *current_path*, keeping first occurrences only."""
    combined = list(entries) + current_path.split(PATH_SEPARATOR)
    return PATH_SEPARATOR.join(dict.fromkeys(combined))


def fallback_paths(home: Optional[str]) -> List[str]:
    paths = []
    for entry in ShellEnvConfig.FALLBACK_PATHS:
        if entry.startswith("~"):
            if not home:
                continue
            entry = home.rstrip("/") + entry[1:]
        paths.append(entry)
    return paths


@dataclass
class CaptureResult:
    variables: List[Tuple[str, str]] = field(default_factory=list)
    error: Optional[ShellEnvError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, variables: List[Tuple[str, str]]) -> "CaptureResult":
        return cls(variables=variables)

    @classmethod
    def failure(cls, error: ShellEnvError) -> "CaptureResult":
        return cls(error=error)


class ShellEnvironmentLoader:
    def __init__(
        self,
        env: Optional[EnvironmentTable] = None,
        executor=None,
        config: Optional[LoaderConfig] = None,
        skip: Callable[[str], bool] = skip_dev_server_vars,
        platform: Optional[str] = None,
    ):
        self.env = env if env is not None else ProcessEnvironment()
        self.executor = executor if executor is not None else SubprocessExecutor()
        self.config = config or LoaderConfig()
        self.skip = skip
        self.platform = platform
        self.loaded_count = 0
        self.fell_back = False

    def load(self) -> None:
        self.loaded_count = 0
        self.fell_back = False

        if not self._should_run():
            return

        try:
            result = self._capture()
            if result.ok:
                self.loaded_count = self._merge(result.variables)
                logger.info("Loaded %d environment variables", self.loaded_count)
                self._log_path()
                return
            error = result.error
        except Exception as e:
            logger.exception("Unexpected error while loading shell environment")
            error = e

        logger.warning("Failed to load shell environment: %s", error)
        logger.warning("Adding common paths as fallback")
        self._fallback()

    def _should_run(self) -> bool:
        if not self.config.force and not PlatformDetector.is_gui_restricted(self.platform):
            logger.debug("Not a GUI-restricted platform, nothing to do")
            return False

        if self.env.get(ShellEnvConfig.DEV_SERVER_MARKER):
            logger.info("Skipping in dev mode (already have shell environment)")
            return False

        return True

    def resolve_shell(self) -> str:
        return self.config.shell or self.env.get("SHELL") or ShellEnvConfig.DEFAULT_SHELL

    def build_invocation(self) -> ShellInvocation:
        shell = self.resolve_shell()
        child_env: Dict[str, str] = {}
        for name in ShellEnvConfig.INHERITED_VARS:
            value = self.env.get(name)
            if value is not None:
                child_env[name] = value
        child_env["SHELL"] = shell
        child_env["TERM"] = ShellEnvConfig.TERM
        child_env.update(ShellEnvConfig.HARDENING_VARS)

        # -l sources profile files (.zprofile), -i sources rc files (.zshrc)
        command = f"echo {ShellEnvConfig.ENV_MARKER} && env"
        return ShellInvocation(
            shell=shell,
            args=["-l", "-i", "-c", command],
            env=child_env,
            timeout=self.config.timeout,
        )

    def _capture(self) -> CaptureResult:
        invocation = self.build_invocation()
        logger.info("Loading environment from %s", invocation.shell)
        try:
            output = self.executor.execute(invocation)
        except ShellEnvError as e:
            return CaptureResult.failure(e)

        try:
            section = extract_env_section(output)
        except MarkerNotFoundError as e:
            logger.warning("%s; treating shell environment as empty", e)
            section = ""
        return CaptureResult.success(list(parse_env_lines(section)))

    def _merge(self, variables: Iterable[Tuple[str, str]]) -> int:
        count = 0
        for key, value in variables:
            if self.skip(key):
                logger.debug("Skipping %s", key)
                continue
            self.env.set(key, value)
            count += 1
        return count

    def _fallback(self) -> None:
        self.fell_back = True
        current = self.env.get("PATH") or ShellEnvConfig.DEFAULT_PATH
        self.env.set("PATH", merge_path(fallback_paths(self.env.get("HOME")), current))
        self._log_path()

    def _log_path(self) -> None:
        path = self.env.get("PATH")
        if path:
            logger.info("PATH has %d entries", len(path.split(PATH_SEPARATOR)))


def load_shell_env(env: Optional[EnvironmentTable] = None, config: Optional[LoaderConfig] = None) -> None:
    ShellEnvironmentLoader(env=env, config=config).load()
