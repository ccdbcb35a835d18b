import pytest

from gpgssh_core.runner import ScriptedRunner
from gpgssh_core.storage import InMemoryControlStore
from gpgssh_core.session import GpgSshSession

UID_PAD = " " * 10

PRIMARY_FPR = "AAAA1111AAAA1111AAAA1111AAAA1111AAAA1111"
AUTH_FPR = "BBBB2222BBBB2222BBBB2222BBBB2222BBBB2222"
AUTH_GRIP = "GRIP000000000000000000000000000000000000"

ALICE_LISTING = [
    "pub   rsa2048 [SC]",
    "      " + PRIMARY_FPR,
    "uid" + UID_PAD + "[ultimate] Alice <a@example.com>",
    "sub   rsa2048 [A]",
    "      " + AUTH_FPR,
    "      Keygrip = " + AUTH_GRIP,
    "",
]

BOB_LISTING = [
    "pub   ed25519 2019-03-01 [SC] [expires: 2021-03-01]",
    "      CCCC 3333 CCCC 3333 CCCC  3333 CCCC 3333 CCCC 3333",
    "      Keygrip = PRIMARYGRIPBOB",
    "uid" + UID_PAD + "[ unknown] Bob <bob@example.org>",
    "uid" + UID_PAD + "[ unknown] Robert <robert@example.org>",
    "sub   cv25519 2019-03-01 [E]",
    "      DDDD 4444 DDDD 4444 DDDD  4444 DDDD 4444 DDDD 4444",
    "      Keygrip = ENCGRIPBOB",
    "",
]

KEYRING_BANNER = [
    "/home/alice/.gnupg/pubring.kbx",
    "------------------------------",
]

VERSION_TEXT = "\r\n".join([
    "gpg (GnuPG) 2.2.4",
    "libgcrypt 1.8.2",
    "Copyright (C) 2017 Free Software Foundation, Inc.",
    "",
    "Home: C:/Users/alice/AppData/Roaming/gnupg",
    "Supported algorithms:",
    "Pubkey: RSA, ELG, DSA, ECDH, ECDSA, EDDSA",
    "",
])

LIST_KEYS_CMD = "gpg --with-keygrip --fingerprint --fingerprint -k"


def crlf(lines):
    return "\r\n".join(lines) + "\r\n"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("GPGSSH_EXPECTED_VERSION", "GPGSSH_HOME", "GPGSSH_STORE", "GPGSSH_RUNNER",
                "GPGSSH_GPG", "GPGSSH_GPGCONF"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def runner():
    return ScriptedRunner({
        "gpg --version": VERSION_TEXT,
        LIST_KEYS_CMD: crlf(KEYRING_BANNER + ALICE_LISTING + BOB_LISTING),
    })


@pytest.fixture
def store():
    return InMemoryControlStore()


@pytest.fixture
def session(runner, store):
    return GpgSshSession(runner=runner, store=store)
