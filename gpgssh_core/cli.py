#!/usr/bin/env python3
"""Command line front end: ``gpgssh <command>``."""
import argparse, json, sys

from .gpg import expected_gpg_version
from .session import GpgSshSession

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_UNSUPPORTED = 2
EXIT_PARSE_ERROR = 3


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="gpgssh", description="Use GnuPG authentication subkeys with SSH")
    ap.add_argument("--any-version", action="store_true", help="do not require the supported gpg version")
    sub = ap.add_subparsers(dest="cmd", required=True)
    sub.add_parser("check", help="show gpg version and home directory")
    keys = sub.add_parser("keys", help="list keys with their sshcontrol status")
    keys.add_argument("--json", action="store_true")
    sub.add_parser("agent-config", help="show whether gpg-agent putty support is enabled")
    sub.add_parser("enable-putty", help="enable putty support and restart gpg-agent")
    sub.add_parser("restart-agent")
    auth = sub.add_parser("authorize", help="add a key's authentication grip to sshcontrol")
    auth.add_argument("hash")
    export = sub.add_parser("export", help="print the ssh public key of a key")
    export.add_argument("hash")
    export.add_argument("--stripped", action="store_true", help="print only the base64 key blob")
    return ap


def _run(args, session: GpgSshSession) -> int:
    info = session.check()
    if args.cmd == "check":
        print(json.dumps({"version": info.version, "home": info.home, "supported": info.supported}))
        return EXIT_OK

    if not info.supported and not args.any_version:
        print(f"unsupported gpg version {info.version!r} (expected {expected_gpg_version()!r})", file=sys.stderr)
        return EXIT_UNSUPPORTED

    if args.cmd == "agent-config":
        print(json.dumps({"putty_support": session.agent_putty_support()}))
        return EXIT_OK
    if args.cmd == "restart-agent":
        session.restart_agent()
        return EXIT_OK
    if args.cmd == "enable-putty":
        if session.agent_putty_support():
            print("putty support already enabled")
            return EXIT_OK
        return EXIT_OK if session.enable_putty_support() else EXIT_FAILED

    result = session.query_keys()
    if not result.ok:
        print(f"cannot parse gpg output: {result.error}", file=sys.stderr)
        return EXIT_PARSE_ERROR
    session.query_sshcontrol()

    if args.cmd == "keys":
        if args.json:
            print(json.dumps([k.to_dict() for k in session.keys], indent=2))
        else:
            for k in session.keys:
                print(k.summary())
        return EXIT_OK

    if args.cmd == "authorize":
        plan = session.authorize_key(args.hash)
        if not plan.ok:
            print(f"cannot authorize {args.hash}: {plan.reason}", file=sys.stderr)
            return EXIT_FAILED
        print(plan.grip)
        return EXIT_OK

    if args.cmd == "export":
        exported = session.export_ssh_key(args.hash)
        if exported is None or not exported.raw:
            print(f"no ssh key for {args.hash}", file=sys.stderr)
            return EXIT_FAILED
        print(exported.stripped if args.stripped else exported.raw)
        return EXIT_OK

    return EXIT_FAILED


def main(argv=None, session: GpgSshSession = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return _run(args, session or GpgSshSession())
    except Exception as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
