# gpgssh_core/storage/provider.py
from __future__ import annotations
from typing import List, Optional


class ControlStore:
    """
    Line-oriented access to gpg-agent's plain text files (sshcontrol,
    gpg-agent.conf). Files are only ever read whole or appended to.
    """

    def read_lines(self, name: str) -> Optional[List[str]]:
        """Lines of ``name`` without terminators, or None if it does not exist."""
        raise NotImplementedError

    def append_line(self, name: str, line: str) -> None:
        raise NotImplementedError

    def path_for(self, name: str) -> str:
        raise NotImplementedError
