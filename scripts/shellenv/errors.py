"""Failure kinds raised while capturing the login shell environment.

None of these ever leave the loaders: they are caught at the ``load()``
boundary, logged, and turned into the PATH fallback (or ignored, for a
missing marker).
"""

from typing import Optional


class ShellEnvError(RuntimeError):
    pass


class SpawnError(ShellEnvError):
    """The shell binary is missing or not executable."""


class ShellTimeoutError(ShellEnvError):
    def __init__(self, shell: str, timeout: float):
        super().__init__(f"{shell} did not finish within {timeout:g}s")
        self.shell = shell
        self.timeout = timeout


class NonZeroExitError(ShellEnvError):
    def __init__(self, shell: str, returncode: int, stderr: Optional[str] = None):
        detail = _tail(stderr)
        message = f"{shell} exited with status {returncode}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.shell = shell
        self.returncode = returncode
        self.stderr = stderr or ""


class MarkerNotFoundError(ShellEnvError):
    """Shell output carried no environment marker; treated as an empty section."""


def _tail(text: Optional[str], limit: int = 200) -> str:
    if not text:
        return ""
    text = text.strip()
    return text if len(text) <= limit else "..." + text[-limit:]
