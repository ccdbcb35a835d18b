from __future__ import annotations
from typing import Optional


class GpgSshError(Exception):
    pass


class KeyListingParseError(GpgSshError):
    """Raised when a key listing line breaks the record structure."""

    def __init__(self, message: str, line_no: int = 0, line: str = "", state: Optional[str] = None):
        super().__init__(message)
        self.line_no = line_no
        self.line = line
        self.state = state

    def __str__(self) -> str:
        base = super().__str__()
        if self.line_no:
            return f"{base} (line {self.line_no}: {self.line!r})"
        return base


class CommandError(GpgSshError):
    pass


class CommandTimeoutError(CommandError):
    pass


class CommandNotFoundError(CommandError):
    pass


class ControlStoreError(GpgSshError):
    pass
