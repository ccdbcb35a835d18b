"""
gpgssh_core.session
-------------------
Orchestrates one interactive session against the local GnuPG install:

- check gpg version and home directory
- list keys and reconcile them with sshcontrol
- authorize a key for SSH (append its authentication grip to sshcontrol)
- export the SSH form of a key
- inspect / enable gpg-agent putty support and restart the agent

Collaborator failures (timeouts, unreadable files) are logged and turned
into empty results, never propagated to the caller.
"""

from __future__ import annotations
from typing import List, Optional
import os

from .constants import AGENT_CONF_FILE, LIST_KEYS_ARGS, PUTTY_SUPPORT_OPTION, SSHCONTROL_FILE
from .crypto import ExportedSshKey, parse_exported_ssh_key
from .errors import CommandError, ControlStoreError
from .gpg import GpgInfo, parse_gpg_version, putty_support_enabled
from .logger import get_logger
from .models import Key
from .parser import ParseResult, parse_key_listing
from .reconcile import AuthorizationPlan, find_key, plan_authorization, reconcile_sshcontrol
from .runner import BaseRunner, runner_factory
from .storage import ControlStore, load_control_store
from .utils import split_output_lines

log = get_logger("GpgSsh.Session")

REASON_NO_HOME = "no-gpg-home"
REASON_WRITE_FAILED = "write-failed"


class GpgSshSession:
    def __init__(
        self,
        runner: Optional[BaseRunner] = None,
        store: Optional[ControlStore] = None,
        config: Optional[dict] = None,
    ):
        self.config = config or {}
        self.runner = runner or runner_factory(self.config)
        self.store = store
        self.gpg = self.config.get("gpg") or os.getenv("GPGSSH_GPG", "gpg")
        self.gpgconf = self.config.get("gpgconf") or os.getenv("GPGSSH_GPGCONF", "gpgconf")
        self.info = GpgInfo()
        self.keys: List[Key] = []

    # ------------------------------------------------------------------
    # Process collaborator
    # ------------------------------------------------------------------
    def execute(self, command: str, args: List[str]) -> str:
        try:
            result = self.runner.run(command, args)
        except CommandError as e:
            log.error(f"[EXEC] {e}")
            return ""
        log.debug(f"[EXEC] [{result.cmdline}] {result.output!r}")
        return result.output

    # ------------------------------------------------------------------
    # gpg installation
    # ------------------------------------------------------------------
    def check(self) -> GpgInfo:
        self.info = parse_gpg_version(self.execute(self.gpg, ["--version"]))
        log.info(f"[CHECK] version={self.info.version!r} home={self.info.home!r} supported={self.info.supported}")
        if self.store is None:
            try:
                self.store = load_control_store(self.info.home, self.config.get("store"))
            except ControlStoreError as e:
                log.warning(f"[CHECK] no control store: {e}")
        return self.info

    @property
    def supported(self) -> bool:
        return self.info.supported

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------
    def query_keys(self) -> ParseResult:
        self.keys = []
        output = self.execute(self.gpg, list(LIST_KEYS_ARGS))
        result = parse_key_listing(split_output_lines(output))
        if not result.ok:
            log.error("ERROR: cannot parse gpg output")
            return result

        self.keys = result.keys
        for k in self.keys:
            for line in k.describe():
                log.info(f"[KEYS] {line}")
        return result

    def query_sshcontrol(self) -> Optional[int]:
        """Reconcile ``self.keys`` with sshcontrol; None when the home is unknown."""
        if self.store is None:
            log.warning("[SSHCONTROL] gpg home unknown, run check first")
            return None

        grips = None
        try:
            grips = self.store.read_lines(SSHCONTROL_FILE)
        except ControlStoreError as e:
            log.error(f"ERROR: {e}")
        else:
            if grips is None:
                log.info(f"[SSHCONTROL] {self.store.path_for(SSHCONTROL_FILE)} does not yet exist (will be created)")
            else:
                log.info(f"[SSHCONTROL] content of {self.store.path_for(SSHCONTROL_FILE)}: {grips}")

        return reconcile_sshcontrol(self.keys, grips)

    def load(self) -> ParseResult:
        self.check()
        result = self.query_keys()
        if result.ok:
            self.query_sshcontrol()
        return result

    def authorize_key(self, key_hash: str) -> AuthorizationPlan:
        if self.store is None:
            return AuthorizationPlan(key_hash, reason=REASON_NO_HOME)

        plan = plan_authorization(self.keys, key_hash)
        if not plan.ok:
            return plan

        path = self.store.path_for(SSHCONTROL_FILE)
        log.info(f"Adding grip {plan.grip} for fingerprint {key_hash} to ssh control file {path}")
        try:
            self.store.append_line(SSHCONTROL_FILE, plan.grip)
        except ControlStoreError as e:
            log.error(f"ERROR: {e}")
            return AuthorizationPlan(key_hash, reason=REASON_WRITE_FAILED)

        self.query_sshcontrol()
        return plan

    def export_ssh_key(self, key_hash: str) -> Optional[ExportedSshKey]:
        # the listed hash is the primary key; ssh needs the [A] subkey
        k = find_key(self.keys, key_hash)
        sub = k.auth_subkey() if k else None
        if sub is None or not sub.fingerprint:
            log.warning("Cannot find a suitable key for ssh (no subkey with auth capability found) !")
            return None
        return parse_exported_ssh_key(self.execute(self.gpg, ["--export-ssh-key", sub.fingerprint + "!"]))

    # ------------------------------------------------------------------
    # gpg-agent
    # ------------------------------------------------------------------
    def agent_putty_support(self) -> bool:
        output = self.execute(self.gpgconf, ["--list-options", "gpg-agent"])
        return putty_support_enabled(split_output_lines(output))

    def restart_agent(self) -> None:
        self.execute(self.gpgconf, ["--kill", "gpg-agent"])
        self.execute(self.gpgconf, ["--launch", "gpg-agent"])
        log.warning(
            "WARNING: gpg-agent spawns processes to handle putty-like request - "
            "so do not forget to also restart your client !"
        )

    def enable_putty_support(self) -> bool:
        if self.store is None:
            log.warning("[AGENT] gpg home unknown, run check first")
            return False
        log.info(f"Adding '{PUTTY_SUPPORT_OPTION}' to gpg-agent configuration file {self.store.path_for(AGENT_CONF_FILE)}")
        try:
            self.store.append_line(AGENT_CONF_FILE, PUTTY_SUPPORT_OPTION)
        except ControlStoreError as e:
            log.error(f"ERROR: {e}")
            return False
        enabled = self.agent_putty_support()
        self.restart_agent()
        return enabled
