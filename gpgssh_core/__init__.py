"""
GPGSSH Core Package
===================
Helpers for exposing GnuPG authentication subkeys to SSH through gpg-agent.

Provides:
- Key listing parser (``gpg --with-keygrip --fingerprint --fingerprint -k``)
- sshcontrol reconciliation and grip selection
- Thin command runner / control file adapters and a session orchestrator
"""

from .errors import GpgSshError, KeyListingParseError
from .models import Identity, Key, SshControlStatus, Subkey
from .parser import ParseResult, ParseState, parse_key_listing, parse_keys
from .reconcile import plan_authorization, reconcile_sshcontrol, select_authorization_grip

__all__ = [
    "GpgSshError",
    "KeyListingParseError",
    "Identity",
    "Key",
    "SshControlStatus",
    "Subkey",
    "ParseResult",
    "ParseState",
    "parse_key_listing",
    "parse_keys",
    "plan_authorization",
    "reconcile_sshcontrol",
    "select_authorization_grip",
]
