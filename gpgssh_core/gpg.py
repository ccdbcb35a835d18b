"""
gpgssh_core.gpg
---------------
Decoders for the small bits of gpg / gpgconf output the session needs
besides the key listing itself.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable
import os, re

from .constants import PUTTY_SUPPORT_OPTION, SUPPORTED_GPG_VERSION
from .utils import split_output_lines

_HOME_RX = re.compile(r"^Home: (?P<home>.*)$")

# gpgconf --list-options fields: name:flags:level:description:type:alt-type:argname:default:argdef:value
_VALUE_FIELD = 9


def expected_gpg_version() -> str:
    return os.getenv("GPGSSH_EXPECTED_VERSION", SUPPORTED_GPG_VERSION)


@dataclass
class GpgInfo:
    version: str = ""
    home: str = ""

    @property
    def supported(self) -> bool:
        return bool(self.version) and self.version == expected_gpg_version()


def parse_gpg_version(text: str) -> GpgInfo:
    lines = split_output_lines(text)
    info = GpgInfo(version=lines[0] if lines else "")
    for line in lines:
        m = _HOME_RX.match(line)
        if m:
            info.home = m.group("home").strip()
            break
    return info


def putty_support_enabled(lines: Iterable[str]) -> bool:
    for line in lines:
        if line.startswith(PUTTY_SUPPORT_OPTION):
            fields = line.split(":")
            if len(fields) > _VALUE_FIELD and fields[_VALUE_FIELD] == "1":
                return True
    return False
