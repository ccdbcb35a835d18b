# gpgssh_core/models.py
from __future__ import annotations
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Any, Dict, List, Optional


class SshControlStatus(str, Enum):
    """Whether one of the key's grips is listed in gpg-agent's sshcontrol file."""
    UNKNOWN = "unknown"
    AUTHORIZED = "authorized"
    UNAUTHORIZED = "unauthorized"

    @property
    def label(self) -> str:
        if self is SshControlStatus.UNAUTHORIZED:
            return "not authorized"
        return self.value


@dataclass(frozen=True)
class Identity:
    exp: str = ""
    name: str = ""
    mail: str = ""


@dataclass
class Subkey:
    """
    One key slot of a listing record. The primary key is stored with the
    same shape in slot 0 of ``Key.subs``.

    ``fingerprint`` and ``grip`` arrive on continuation lines after the
    ``pub``/``sub`` line, so they start empty and are filled in place.
    """
    fingerprint: str = ""
    algo: str = ""
    auth: bool = False
    grip: str = ""


@dataclass
class Key:
    hash: str = ""
    subs: List[Subkey] = field(default_factory=list)
    uids: List[Identity] = field(default_factory=list)
    sshcontrol: SshControlStatus = SshControlStatus.UNKNOWN

    def auth_subkey(self) -> Optional[Subkey]:
        return next((s for s in self.subs if s.auth), None)

    def names(self) -> List[str]:
        return [u.name for u in self.uids]

    def summary(self) -> str:
        """One-line digest: ``<hash> (<names>) [ssh: <status>]``."""
        text = self.hash
        names = self.names()
        if names:
            text += " (" + "|".join(names) + ")"
        return text + f" [ssh: {self.sshcontrol.label}]"

    def describe(self) -> List[str]:
        lines = [self.hash]
        for s in self.subs:
            lines.append(f"- {s.algo} {'AUTH' if s.auth else 'NO-AUTH'} {s.grip} {s.fingerprint}")
        for u in self.uids:
            lines.append(f"- {u.name} {u.mail} {u.exp}")
        return lines

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["sshcontrol"] = self.sshcontrol.value
        return d
