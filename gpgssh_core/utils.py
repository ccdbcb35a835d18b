"""
gpgssh_core.utils
-----------------
Small text helpers shared by the parser, the runners and the ssh key helpers.
"""

from __future__ import annotations
import base64, re
from typing import List

_LINE_TERMINATOR = re.compile(r"\r?\n")


def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def b64d(s: str) -> bytes:
    return base64.b64decode(s.encode("ascii"))

def split_output_lines(text: str) -> List[str]:
    # gpg on Windows terminates with CRLF; POSIX builds use LF
    if not text:
        return []
    return _LINE_TERMINATOR.split(text)

def strip_whitespace(s: str) -> str:
    return "".join(s.split())
