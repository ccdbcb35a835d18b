# gpgssh_core/runner/runner_scripted.py
from typing import Dict, List, Optional, Tuple

from gpgssh_core.logger import get_logger
from gpgssh_core.runner.runner_base import BaseRunner, CommandResult

log = get_logger("GpgSsh.Runner.Scripted")


class ScriptedRunner(BaseRunner):
    """
    In-process runner returning canned outputs.

    Outputs are registered per command line (``"gpg --version"``); a
    command line with no registration yields empty output. Every call is
    recorded in ``calls``.
    """
    name = "scripted"

    def __init__(self, outputs: Optional[Dict[str, str]] = None):
        self.outputs: Dict[str, str] = dict(outputs or {})
        self.calls: List[Tuple[str, List[str]]] = []

    def register(self, cmdline: str, output: str) -> None:
        self.outputs[cmdline] = output

    def run(self, command: str, args: Optional[List[str]] = None) -> CommandResult:
        args = list(args or [])
        self.calls.append((command, args))
        result = CommandResult(command=command, args=args)
        result.output = self.outputs.get(result.cmdline, "")
        log.info(f"[SCRIPTED RUN] {result.cmdline}")
        return result
