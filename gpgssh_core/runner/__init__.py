# gpgssh_core/runner/__init__.py
import os
from gpgssh_core.constants import DEFAULT_ENCODING, DEFAULT_TIMEOUT_S
from gpgssh_core.runner.runner_base import BaseRunner, CommandResult
from gpgssh_core.runner.runner_scripted import ScriptedRunner
from gpgssh_core.runner.runner_subprocess import SubprocessRunner


def runner_factory(config: dict | None = None) -> BaseRunner:
    """
    mode (config["runner"] or GPGSSH_RUNNER):
      - "subprocess" → real gpg / gpgconf binaries (default)
      - "scripted"   → canned outputs, for tests and dry runs
    """
    config = config or {}
    mode = (config.get("runner") or os.getenv("GPGSSH_RUNNER", "subprocess")).lower()

    if mode == "scripted":
        return ScriptedRunner(config.get("outputs"))

    if mode == "subprocess":
        return SubprocessRunner(
            timeout=float(config.get("timeout") or os.getenv("GPGSSH_TIMEOUT", DEFAULT_TIMEOUT_S)),
            encoding=config.get("encoding") or os.getenv("GPGSSH_ENCODING", DEFAULT_ENCODING),
        )

    raise ValueError(f"Unknown runner: {mode}")


__all__ = [
    "BaseRunner",
    "CommandResult",
    "ScriptedRunner",
    "SubprocessRunner",
    "runner_factory",
]
