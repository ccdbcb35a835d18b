# gpgssh_core/storage/__init__.py

from .provider import ControlStore
from .providers.memory_provider import InMemoryControlStore
from .providers.file_provider import FileControlStore
import os


def load_control_store(home: str | None = None, config: dict | None = None) -> ControlStore:
    """
    Factory resolver for the sshcontrol / gpg-agent.conf backend.

        - file (default): files inside the gpg home directory
        - memory
    GPGSSH_HOME overrides the home directory reported by gpg.
    """
    config = config or {}
    provider = config.get("provider") or os.getenv("GPGSSH_STORE", "file")

    if provider == "memory":
        return InMemoryControlStore()

    if provider == "file":
        home_dir = config.get("home") or os.getenv("GPGSSH_HOME") or home
        return FileControlStore(os.path.expanduser(home_dir or ""))

    raise ValueError(f"Unknown control store provider: {provider}")


__all__ = [
    "ControlStore",
    "InMemoryControlStore",
    "FileControlStore",
    "load_control_store",
]
