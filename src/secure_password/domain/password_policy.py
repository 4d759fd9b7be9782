"""Deterministic digest actions for writes to the plaintext password attribute."""

from __future__ import annotations

from enum import Enum, StrEnum
from typing import Final


class _Unset(Enum):
    TOKEN = "unset"

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset.TOKEN
"""Marker for a write that supplied no value at all."""

PasswordValue = str | None | _Unset


class DigestAction(StrEnum):
    """What happens to the digest attribute for one password write."""

    KEEP = "keep"
    CLEAR = "clear"
    HASH = "hash"


def decide_digest_action(value: PasswordValue) -> DigestAction:
    """Return the digest action for one incoming password value."""

    if value is UNSET:
        return DigestAction.KEEP
    if value is None:
        return DigestAction.CLEAR
    if not isinstance(value, str):
        raise TypeError(f"password must be a string or None, got {type(value).__name__}")
    if value == "":
        return DigestAction.KEEP
    # Whitespace-only strings are legitimate passwords.
    return DigestAction.HASH
