from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from gpgssh_core.utils import split_output_lines


@dataclass
class CommandResult:
    command: str
    args: List[str] = field(default_factory=list)
    output: str = ""
    returncode: Optional[int] = 0

    @property
    def lines(self) -> List[str]:
        return split_output_lines(self.output)

    @property
    def cmdline(self) -> str:
        return " ".join([self.command] + list(self.args))


class BaseRunner:
    """
    Runs gpg / gpgconf and hands back their combined text output.

    ``output`` is stdout followed by stderr, already decoded.
    """
    name: str = "base"

    def run(self, command: str, args: Optional[List[str]] = None) -> CommandResult:
        raise NotImplementedError

    def healthz(self) -> dict:
        return {"status": "ok", "runner": self.name}
