from typing import Dict, List, Optional
from gpgssh_core.storage.provider import ControlStore


class InMemoryControlStore(ControlStore):
    def __init__(self, files: Optional[Dict[str, List[str]]] = None, home: str = "memory"):
        self.files: Dict[str, List[str]] = {k: list(v) for k, v in (files or {}).items()}
        self.home = home

    def path_for(self, name: str) -> str:
        return f"{self.home}/{name}"

    def read_lines(self, name: str):
        lines = self.files.get(name)
        return list(lines) if lines is not None else None

    def append_line(self, name: str, line: str):
        self.files.setdefault(name, []).append(line)
