"""
gpgssh_core.crypto
------------------
Handling of ``gpg --export-ssh-key <fpr>!`` output.

gpg prints an OpenSSH public key line such as::

    ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAA... openpgp:0xDEADBEEF

The raw line goes into ``authorized_keys``; the stripped form (the base64
blob alone) is what PuTTY style tools ask for. The key is loaded with
``cryptography`` to make sure gpg handed back something usable.
"""

from __future__ import annotations
from dataclasses import dataclass
import hashlib

from cryptography.hazmat.primitives import serialization

from .utils import b64d, b64e


@dataclass
class ExportedSshKey:
    raw: str = ""
    stripped: str = ""
    key_type: str = ""
    comment: str = ""
    fingerprint: str = ""
    valid: bool = False


def load_ssh_public_key(key_type: str, blob_b64: str):
    try:
        return serialization.load_ssh_public_key(f"{key_type} {blob_b64}".encode("ascii"))
    except Exception:
        return None


def ssh_fingerprint(blob_b64: str) -> str:
    """OpenSSH style ``SHA256:`` fingerprint of a base64 key blob."""
    digest = hashlib.sha256(b64d(blob_b64)).digest()
    return "SHA256:" + b64e(digest).rstrip("=")


def parse_exported_ssh_key(text: str) -> ExportedSshKey:
    raw = text.strip()
    out = ExportedSshKey(raw=raw)
    tokens = raw.split(" ")
    # a usable export always carries the openpgp:0x... comment
    if len(tokens) >= 3:
        out.stripped = tokens[1]
    if len(tokens) < 2:
        return out

    out.key_type = tokens[0]
    out.comment = " ".join(tokens[2:])
    key = load_ssh_public_key(tokens[0], tokens[1])
    if key is not None:
        canonical = key.public_bytes(
            serialization.Encoding.OpenSSH, serialization.PublicFormat.OpenSSH
        ).decode("ascii")
        out.fingerprint = ssh_fingerprint(canonical.split(" ")[1])
        out.valid = True
    return out
