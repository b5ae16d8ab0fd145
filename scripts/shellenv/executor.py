import subprocess
from dataclasses import dataclass, field
from typing import Dict, List

from shellenv.config import ShellEnvConfig
from shellenv.errors import NonZeroExitError, ShellTimeoutError, SpawnError


@dataclass(frozen=True)
class ShellInvocation:
    shell: str
    args: List[str]
    env: Dict[str, str] = field(default_factory=dict)
    timeout: float = ShellEnvConfig.SHELL_TIMEOUT

    @property
    def argv(self) -> List[str]:
        return [self.shell, *self.args]


class SubprocessExecutor:
    """Run a ShellInvocation and return its stdout.

    stdin is not connected; stdout and stderr are captured. On timeout
    ``subprocess.run`` kills the child and whatever it printed is dropped.
    """

    def execute(self, invocation: ShellInvocation) -> str:
        try:
            result = subprocess.run(
                invocation.argv,
                env=invocation.env,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=invocation.timeout,
                check=True,
            )
        except subprocess.TimeoutExpired as e:
            raise ShellTimeoutError(invocation.shell, invocation.timeout) from e
        except subprocess.CalledProcessError as e:
            raise NonZeroExitError(invocation.shell, e.returncode, e.stderr) from e
        except OSError as e:
            raise SpawnError(f"cannot run {invocation.shell}: {e}") from e
        return result.stdout
