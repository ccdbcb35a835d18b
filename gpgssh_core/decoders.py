"""
gpgssh_core.decoders
--------------------
Field decoders for single lines of a gpg key listing.

These are deliberately lenient: a line that does not have the exact
expected shape decodes to empty fields instead of failing. Structural
checks belong to the parser.
"""

from __future__ import annotations
import re
from .models import Identity, Subkey

_SUBKEY_RX = re.compile(r"^(pub|sub) {3}(?P<algo>.*) \[(?P<capa>[A-Z]+)\]")
# "uid" must be followed by exactly 10 blanks
_IDENTITY_RX = re.compile(r"^uid {10}\[(?P<exp>.*)\] (?P<name>.+) <(?P<mail>.+)>")
_GRIP_RX = re.compile(r"^ {6}Keygrip = (?P<grip>.*)")

AUTH_CAPABILITY = "A"


def decode_subkey_line(line: str) -> Subkey:
    """``pub   rsa2048 2019-01-01 [SC]`` -> Subkey(algo="rsa2048 2019-01-01", auth=False)"""
    m = _SUBKEY_RX.match(line)
    if not m:
        return Subkey()
    return Subkey(algo=m.group("algo"), auth=AUTH_CAPABILITY in m.group("capa"))


def decode_identity_line(line: str) -> Identity:
    m = _IDENTITY_RX.match(line)
    if not m:
        return Identity()
    return Identity(exp=m.group("exp"), name=m.group("name"), mail=m.group("mail"))


def decode_grip_line(line: str) -> str:
    m = _GRIP_RX.match(line)
    return m.group("grip") if m else ""
