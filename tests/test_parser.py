import pytest

from gpgssh_core.decoders import decode_subkey_line
from gpgssh_core.errors import KeyListingParseError
from gpgssh_core.models import SshControlStatus
from gpgssh_core.parser import LineKind, ParseState, classify_line, parse_key_listing, parse_keys

from conftest import (
    ALICE_LISTING, AUTH_FPR, AUTH_GRIP, BOB_LISTING, KEYRING_BANNER, PRIMARY_FPR, UID_PAD,
)


def test_single_record_roundtrip():
    result = parse_key_listing(ALICE_LISTING)
    assert result.ok
    assert len(result.keys) == 1

    k = result.keys[0]
    assert k.hash == PRIMARY_FPR
    assert k.sshcontrol is SshControlStatus.UNKNOWN
    assert len(k.subs) == 2

    primary, auth = k.subs
    assert primary.auth is False
    assert primary.fingerprint == PRIMARY_FPR
    assert primary.grip == ""
    assert auth.auth is True
    assert auth.algo == "rsa2048"
    assert auth.fingerprint == AUTH_FPR
    assert auth.grip == AUTH_GRIP

    assert len(k.uids) == 1
    assert (k.uids[0].exp, k.uids[0].name, k.uids[0].mail) == ("ultimate", "Alice", "a@example.com")


def test_banner_lines_are_ignored_and_key_count_matches_pub_lines():
    lines = KEYRING_BANNER + ALICE_LISTING + [""] + BOB_LISTING
    keys = parse_keys(lines)
    assert len(keys) == sum(1 for line in lines if line.startswith("pub"))
    assert [len(k.subs) for k in keys] == [2, 2]
    assert all(k.subs for k in keys)


def test_first_subkey_matches_pub_line_decoding():
    keys = parse_keys(ALICE_LISTING + BOB_LISTING)
    for k, pub_line in zip(keys, [ALICE_LISTING[0], BOB_LISTING[0]]):
        expected = decode_subkey_line(pub_line)
        assert k.subs[0].algo == expected.algo
        assert k.subs[0].auth == expected.auth


def test_fingerprint_whitespace_is_removed():
    bob = parse_keys(BOB_LISTING)[0]
    assert bob.hash == "CCCC3333" * 5
    assert bob.subs[1].fingerprint == "DDDD4444" * 5
    assert [u.name for u in bob.uids] == ["Bob", "Robert"]


def test_grip_after_pub_attaches_to_slot_zero():
    bob = parse_keys(BOB_LISTING)[0]
    assert bob.subs[0].grip == "PRIMARYGRIPBOB"
    assert bob.subs[1].grip == "ENCGRIPBOB"


def test_subkey_fingerprint_does_not_replace_hash():
    k = parse_keys(ALICE_LISTING)[0]
    assert k.hash == PRIMARY_FPR
    assert k.subs[-1].fingerprint == AUTH_FPR


def test_subkey_outside_record_fails_without_output():
    result = parse_key_listing(["sub   rsa2048 [A]", ""])
    assert not result.ok
    assert result.keys == []
    assert result.error.line_no == 1
    assert result.error.state == ParseState.OUTSIDE_RECORD.value


def test_error_after_complete_records_discards_everything():
    lines = ALICE_LISTING + BOB_LISTING + ["      Keygrip = ORPHAN"]
    result = parse_key_listing(lines)
    assert not result.ok
    assert result.keys == []
    with pytest.raises(KeyListingParseError):
        result.unwrap()


@pytest.mark.parametrize("bad", [
    # second pub before the blank line
    ["pub   rsa2048 [SC]", "pub   rsa2048 [SC]", ""],
    # uid after the subkey section started
    ["pub   rsa2048 [SC]", "sub   rsa2048 [A]", "uid" + UID_PAD + "[ultimate] Alice <a@example.com>", ""],
    # uid outside any record
    ["uid" + UID_PAD + "[ultimate] Alice <a@example.com>"],
    # fingerprint outside any record
    ["      " + PRIMARY_FPR],
])
def test_structural_errors(bad):
    with pytest.raises(KeyListingParseError):
        parse_keys(bad)


def test_malformed_lines_of_known_kind_do_not_abort():
    lines = [
        "pub  rsa2048 [SC]",
        "      " + PRIMARY_FPR,
        "uid  Alice",
        "sub   rsa2048 [A]",
        "      Keygrip = " + AUTH_GRIP,
        "",
    ]
    keys = parse_keys(lines)
    assert len(keys) == 1
    assert keys[0].subs[0].algo == ""
    assert keys[0].subs[0].auth is False
    assert (keys[0].uids[0].name, keys[0].uids[0].mail) == ("", "")
    assert keys[0].subs[1].grip == AUTH_GRIP


def test_unterminated_trailing_record_is_dropped():
    keys = parse_keys(ALICE_LISTING + BOB_LISTING[:-1])
    assert [k.hash for k in keys] == [PRIMARY_FPR]


def test_blank_lines_between_records_are_ignored():
    keys = parse_keys(["", ""] + ALICE_LISTING + ["", "", ""] + BOB_LISTING + [""])
    assert len(keys) == 2


def test_empty_input():
    result = parse_key_listing([])
    assert result.ok and result.keys == []


def test_classify_line():
    assert classify_line("pub   rsa2048 [SC]") is LineKind.PRIMARY
    assert classify_line("sub   rsa2048 [A]") is LineKind.SUBKEY
    assert classify_line("uid" + UID_PAD + "[ultimate] A <a@b>") is LineKind.IDENTITY
    assert classify_line("      Keygrip = X") is LineKind.GRIP
    assert classify_line("      ABCD") is LineKind.FINGERPRINT
    assert classify_line("") is LineKind.BLANK
    assert classify_line("------") is LineKind.OTHER


def test_parse_failure_is_logged(caplog):
    parse_key_listing(["sub   rsa2048 [A]"])
    assert "cannot parse gpg output" in caplog.text
