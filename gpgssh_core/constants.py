# gpgssh_core/constants.py

SUPPORTED_GPG_VERSION = "gpg (GnuPG) 2.2.4"
DEFAULT_TIMEOUT_S = 10.0
DEFAULT_ENCODING = "utf-8"

SSHCONTROL_FILE = "sshcontrol"
AGENT_CONF_FILE = "gpg-agent.conf"
PUTTY_SUPPORT_OPTION = "enable-putty-support"

# Key listing markers
PUB_MARKER = "pub"
SUB_MARKER = "sub"
UID_MARKER = "uid"
GRIP_MARKER = "Keygrip"
CONTINUATION_INDENT = " " * 6

LIST_KEYS_ARGS = ["--with-keygrip", "--fingerprint", "--fingerprint", "-k"]
