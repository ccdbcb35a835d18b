"""
gpgssh_core.reconcile
---------------------
Cross-references parsed keys with gpg-agent's sshcontrol list.

sshcontrol holds one keygrip per line. A key is authorized for SSH when
the grip of any of its subkeys appears in the list. The key collection is
the only place authorization status lives.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .logger import get_logger
from .models import Key, SshControlStatus

log = get_logger("GpgSsh.Reconcile")

REASON_NOT_FOUND = "not-found"
REASON_ALREADY_AUTHORIZED = "already-authorized"
REASON_STATUS_UNKNOWN = "status-unknown"
REASON_NO_AUTH_SUBKEY = "no-auth-subkey"


def reconcile_sshcontrol(keys: List[Key], grips: Optional[Iterable[str]]) -> int:
    """
    Recompute every key's sshcontrol status in place.

    ``grips`` is None when the sshcontrol file does not exist: all keys
    end up unauthorized. Grips are compared verbatim. Returns the number
    of authorized keys.
    """
    for k in keys:
        k.sshcontrol = SshControlStatus.UNAUTHORIZED

    if grips is None:
        return 0

    for grip in grips:
        for k in keys:
            for s in k.subs:
                if s.grip == grip:
                    k.sshcontrol = SshControlStatus.AUTHORIZED

    return sum(1 for k in keys if k.sshcontrol is SshControlStatus.AUTHORIZED)


def select_authorization_grip(key: Key) -> Optional[str]:
    """Grip of the first subkey that can authenticate, if it has one."""
    for s in key.subs:
        if s.auth and s.grip:
            return s.grip
    return None


def find_key(keys: Iterable[Key], key_hash: str) -> Optional[Key]:
    return next((k for k in keys if k.hash == key_hash), None)


@dataclass
class AuthorizationPlan:
    key_hash: str
    grip: Optional[str] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.grip is not None


def plan_authorization(keys: List[Key], key_hash: str) -> AuthorizationPlan:
    """
    Decide which grip should be appended to sshcontrol for ``key_hash``.

    Only keys known to be unauthorized qualify, so sshcontrol must have
    been reconciled first. Failures are reported through ``reason``.
    """
    k = find_key(keys, key_hash)
    if k is None:
        return AuthorizationPlan(key_hash, reason=REASON_NOT_FOUND)
    if k.sshcontrol is SshControlStatus.AUTHORIZED:
        return AuthorizationPlan(key_hash, reason=REASON_ALREADY_AUTHORIZED)
    if k.sshcontrol is SshControlStatus.UNKNOWN:
        return AuthorizationPlan(key_hash, reason=REASON_STATUS_UNKNOWN)

    grip = select_authorization_grip(k)
    if grip is None:
        log.info(f"No suitable key (allowing authentication) found for fingerprint {key_hash}")
        return AuthorizationPlan(key_hash, reason=REASON_NO_AUTH_SUBKEY)
    return AuthorizationPlan(key_hash, grip=grip)
