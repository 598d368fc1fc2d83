"""Enfusion resource identifiers.

Identifiers are 16 uppercase hexadecimal characters drawn from a
cryptographically secure source, e.g. ``6156F2F771D5D73D``.  No registry is
kept; collisions are accepted as negligible.
"""

from __future__ import annotations

import re
import secrets

# Arma Reforger base game project.  Every addon depends on it.
BASE_GAME_GUID = "58D0FB3206B6F859"

GUID_LENGTH = 16

_GUID_RE = re.compile(r"^[0-9A-F]{16}$")


def generate_guid() -> str:
    """Return a new random identifier (8 random bytes, uppercase hex)."""
    return secrets.token_hex(GUID_LENGTH // 2).upper()


def is_guid(text: str) -> bool:
    """Return ``True`` if *text* is a well-formed identifier."""
    return isinstance(text, str) and bool(_GUID_RE.match(text))

