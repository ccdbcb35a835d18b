# gpgssh_core/runner/runner_subprocess.py
import subprocess
from typing import List, Optional

from gpgssh_core.constants import DEFAULT_ENCODING, DEFAULT_TIMEOUT_S
from gpgssh_core.errors import CommandNotFoundError, CommandTimeoutError
from gpgssh_core.logger import get_logger
from gpgssh_core.runner.runner_base import BaseRunner, CommandResult

log = get_logger("GpgSsh.Runner.Subprocess")


class SubprocessRunner(BaseRunner):
    """Runs the real binaries with a wall-clock timeout."""
    name = "subprocess"

    def __init__(self, timeout: float = DEFAULT_TIMEOUT_S, encoding: str = DEFAULT_ENCODING):
        self.timeout = timeout
        self.encoding = encoding

    def run(self, command: str, args: Optional[List[str]] = None) -> CommandResult:
        args = list(args or [])
        log.info(f"[RUN] {command} {' '.join(args)}".rstrip())
        try:
            proc = subprocess.run(
                [command] + args,
                capture_output=True,
                timeout=self.timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            log.error(f"[RUN] Could not run {command}: timeout")
            raise CommandTimeoutError(f"{command} timed out after {self.timeout}s") from e
        except FileNotFoundError as e:
            log.error(f"[RUN] Could not run {command}: not found")
            raise CommandNotFoundError(f"{command} not found") from e

        output = proc.stdout.decode(self.encoding, errors="replace")
        output += proc.stderr.decode(self.encoding, errors="replace")
        log.debug(f"[RUN] {command} rc={proc.returncode} output={output!r}")
        return CommandResult(command=command, args=args, output=output, returncode=proc.returncode)
