"""Auth file reader.

The file holds the Jira username on line 1 and the password (or API token) on
line 2. Anything after line 2 is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from label_norm.errors import CredentialsError


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str = field(repr=False)


def read_credentials(path: str | Path) -> Credentials:
    path = Path(path).expanduser()
    try:
        text = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise CredentialsError(f"cannot read auth file {path}: {e}") from e

    # Split on "\n" only; other line separators may be part of the password
    lines = text.removesuffix("\n").split("\n")
    if len(lines) < 2:
        raise CredentialsError(f"auth file {path} must have <user> on line 1 and <pass> on line 2")

    username, password = lines[0].rstrip("\r"), lines[1].rstrip("\r")
    if not username:
        raise CredentialsError(f"auth file {path} has an empty username")
    return Credentials(username=username, password=password)
