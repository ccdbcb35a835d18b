from __future__ import annotations
from typing import List, Optional
import os

from gpgssh_core.errors import ControlStoreError
from gpgssh_core.logger import get_logger
from gpgssh_core.storage.provider import ControlStore

log = get_logger("GpgSsh.Storage.File")


class FileControlStore(ControlStore):
    def __init__(self, home: str, encoding: str = "utf-8"):
        if not home:
            raise ControlStoreError("gpg home directory is unknown")
        self.home = home
        self.encoding = encoding

    def path_for(self, name: str) -> str:
        return os.path.join(self.home, name)

    def read_lines(self, name: str) -> Optional[List[str]]:
        path = self.path_for(name)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding=self.encoding) as fh:
                return fh.read().splitlines()
        except OSError as e:
            raise ControlStoreError(f"Cannot open {path}") from e

    def append_line(self, name: str, line: str) -> None:
        path = self.path_for(name)
        try:
            os.makedirs(self.home, exist_ok=True)
            with open(path, "a", encoding=self.encoding) as fh:
                fh.write(line + "\n")
        except OSError as e:
            raise ControlStoreError(f"Cannot open {path} for modification") from e
        log.info(f"[STORE] appended to {path}")
