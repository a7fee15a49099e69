import pytest

from label_norm.credentials import read_credentials
from label_norm.errors import CredentialsError


def test_reads_user_and_password(tmp_path):
    auth = tmp_path / "auth"
    auth.write_text("alice\ns3cret\n")
    creds = read_credentials(auth)
    assert creds.username == "alice"
    assert creds.password == "s3cret"


def test_missing_trailing_newline(tmp_path):
    auth = tmp_path / "auth"
    auth.write_text("alice\ns3cret")
    assert read_credentials(str(auth)).password == "s3cret"


def test_windows_line_endings(tmp_path):
    auth = tmp_path / "auth"
    auth.write_bytes(b"alice\r\ns3cret\r\n")
    creds = read_credentials(auth)
    assert (creds.username, creds.password) == ("alice", "s3cret")


def test_password_not_in_repr(tmp_path):
    auth = tmp_path / "auth"
    auth.write_text("alice\ns3cret\n")
    assert "s3cret" not in repr(read_credentials(auth))


def test_single_line_file_rejected(tmp_path):
    auth = tmp_path / "auth"
    auth.write_text("alice\n")
    with pytest.raises(CredentialsError):
        read_credentials(auth)


def test_missing_file(tmp_path):
    with pytest.raises(CredentialsError, match="cannot read auth file"):
        read_credentials(tmp_path / "nope")


def test_password_keeps_unusual_separators(tmp_path):
    """Only "\\n" ends a line; vertical tab, \\x1c and U+2028 stay in the password."""
    auth = tmp_path / "auth"
    password = "pa\x0bss\x1cw\u2028rd"
    auth.write_text(f"alice\n{password}\n", encoding="utf-8")
    assert read_credentials(auth).password == password


def test_empty_password_line_allowed(tmp_path):
    auth = tmp_path / "auth"
    auth.write_text("alice\n\n")
    assert read_credentials(auth).password == ""
