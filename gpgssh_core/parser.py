"""
gpgssh_core.parser
------------------
Parser for the human readable output of::

    gpg --with-keygrip --fingerprint --fingerprint -k

A listing is a sequence of records separated by blank lines::

    pub   rsa2048 2019-01-01 [SC]
          AAAA 1111 AAAA 1111 ...
          Keygrip = 0123...
    uid           [ultimate] Alice <a@example.com>
    sub   rsa2048 2019-01-01 [A]
          BBBB 2222 BBBB 2222 ...
          Keygrip = 4567...

The parser is a fold over the lines with a three-valued state. Any line
that breaks the record structure aborts the whole parse: a malformed
listing means an unexpected gpg version and guessing would corrupt the
key/grip association. Lines outside records (keyring path, separators)
are ignored.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional

from .constants import CONTINUATION_INDENT, GRIP_MARKER, PUB_MARKER, SUB_MARKER, UID_MARKER
from .decoders import decode_grip_line, decode_identity_line, decode_subkey_line
from .errors import KeyListingParseError
from .logger import get_logger
from .models import Key
from .utils import strip_whitespace

log = get_logger("GpgSsh.Parser")


class ParseState(str, Enum):
    OUTSIDE_RECORD = "outside-record"
    IN_RECORD = "in-record"
    IN_SUBKEYS = "in-subkeys"


class LineKind(Enum):
    PRIMARY = "primary-key-start"
    SUBKEY = "subkey-start"
    IDENTITY = "identity"
    GRIP = "grip-continuation"
    FINGERPRINT = "fingerprint-continuation"
    BLANK = "blank"
    OTHER = "other"


def classify_line(line: str) -> LineKind:
    # order matters: a grip line is also indented like a fingerprint line
    if line.startswith(PUB_MARKER):
        return LineKind.PRIMARY
    if line.startswith(SUB_MARKER):
        return LineKind.SUBKEY
    if line.startswith(UID_MARKER):
        return LineKind.IDENTITY
    if GRIP_MARKER in line:
        return LineKind.GRIP
    if line.startswith(CONTINUATION_INDENT):
        return LineKind.FINGERPRINT
    if line == "":
        return LineKind.BLANK
    return LineKind.OTHER


@dataclass
class ParseResult:
    """Either the completed keys (``error is None``) or a failure with no keys."""
    keys: List[Key] = field(default_factory=list)
    error: Optional[KeyListingParseError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> List[Key]:
        if self.error is not None:
            raise self.error
        return self.keys


@dataclass
class _Fold:
    state: ParseState = ParseState.OUTSIDE_RECORD
    current: Key = field(default_factory=Key)
    done: List[Key] = field(default_factory=list)


def _fail(acc: _Fold, line_no: int, line: str, message: str) -> KeyListingParseError:
    return KeyListingParseError(message, line_no=line_no, line=line, state=acc.state.value)


def _step(acc: _Fold, line_no: int, line: str) -> None:
    kind = classify_line(line)

    if kind is LineKind.PRIMARY:
        if acc.state is not ParseState.OUTSIDE_RECORD:
            raise _fail(acc, line_no, line, "public key line inside an unterminated record")
        acc.current.subs.append(decode_subkey_line(line))
        acc.state = ParseState.IN_RECORD

    elif kind is LineKind.SUBKEY:
        if acc.state is ParseState.OUTSIDE_RECORD:
            raise _fail(acc, line_no, line, "subkey line outside of a key record")
        acc.current.subs.append(decode_subkey_line(line))
        acc.state = ParseState.IN_SUBKEYS

    elif kind is LineKind.IDENTITY:
        if acc.state is not ParseState.IN_RECORD:
            raise _fail(acc, line_no, line, "uid line outside of a key record or after subkeys")
        acc.current.uids.append(decode_identity_line(line))

    elif kind is LineKind.GRIP:
        if acc.state is ParseState.OUTSIDE_RECORD:
            raise _fail(acc, line_no, line, "keygrip line outside of a key record")
        if not acc.current.subs:
            raise _fail(acc, line_no, line, "keygrip line before any key line")
        acc.current.subs[-1].grip = decode_grip_line(line)

    elif kind is LineKind.FINGERPRINT:
        if acc.state is ParseState.OUTSIDE_RECORD:
            raise _fail(acc, line_no, line, "fingerprint line outside of a key record")
        if not acc.current.subs:
            raise _fail(acc, line_no, line, "fingerprint line before any key line")
        fp = strip_whitespace(line[len(CONTINUATION_INDENT):])
        # the primary fingerprint identifies the whole key
        if acc.state is ParseState.IN_RECORD:
            acc.current.hash = fp
        acc.current.subs[-1].fingerprint = fp

    elif kind is LineKind.BLANK:
        if acc.state is not ParseState.OUTSIDE_RECORD:
            log.debug(f"[PARSE] record complete hash={acc.current.hash} subs={len(acc.current.subs)}")
            acc.done.append(acc.current)
            acc.current = Key()
            acc.state = ParseState.OUTSIDE_RECORD


def parse_key_listing(lines: Iterable[str]) -> ParseResult:
    """
    Fold ``lines`` into keys.

    A record is only emitted once a blank line closes it; an unterminated
    trailing record is dropped.
    """
    acc = _Fold()
    for line_no, line in enumerate(lines, start=1):
        try:
            _step(acc, line_no, line)
        except KeyListingParseError as e:
            log.warning(f"[PARSE] cannot parse gpg output: {e}")
            return ParseResult(keys=[], error=e)

    if acc.state is not ParseState.OUTSIDE_RECORD:
        log.debug(f"[PARSE] dropping unterminated record hash={acc.current.hash}")
    return ParseResult(keys=acc.done)


def parse_keys(lines: Iterable[str]) -> List[Key]:
    return parse_key_listing(lines).unwrap()
