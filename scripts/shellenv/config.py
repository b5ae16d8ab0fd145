from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class ShellEnvConfig:
    # Printed by the child shell right before `env`; everything ahead of it is startup noise
    ENV_MARKER = "__ENV_START__"

    # Set by the UI dev server when the app runs from a terminal session
    DEV_SERVER_MARKER = "VITE_DEV_SERVER_URL"
    # Keys with this prefix would point a packaged build at the dev server
    DEV_SERVER_PREFIX = "VITE_"

    DEFAULT_SHELL = "/bin/zsh"
    DEFAULT_PATH = "/usr/bin:/bin:/usr/sbin:/sbin"
    SHELL_TIMEOUT = 5.0
    TERM = "xterm-256color"

    # Variables copied from the parent into the otherwise empty child environment
    INHERITED_VARS = ("HOME", "USER", "TMPDIR")

    HARDENING_VARS = {
        # Keeps the /usr/bin/git shim from popping the Command Line Tools installer
        "APPLE_SUPPRESS_DEVELOPER_TOOL_POPUP": "1",
        "GIT_TERMINAL_PROMPT": "0",
    }

    # "~" entries are expanded against $HOME and dropped when HOME is unset
    FALLBACK_PATHS = (
        "/opt/homebrew/bin",
        "/opt/homebrew/sbin",
        "/usr/local/bin",
        "/usr/local/sbin",
        "~/.local/bin",
        "~/.bun/bin",
        "~/.cargo/bin",
    )

    DOTENV_FILENAME = ".env"


@dataclass(frozen=True)
class LoaderConfig:
    shell: Optional[str] = None
    timeout: float = ShellEnvConfig.SHELL_TIMEOUT
    force: bool = False
    dotenv_dir: Optional[Path] = None

    def resolve_dotenv_path(self) -> Path:
        base = self.dotenv_dir if self.dotenv_dir is not None else Path.cwd()
        return Path(base) / ShellEnvConfig.DOTENV_FILENAME
