"""Per-model-type secure password capability descriptors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

PASSWORD_ATTRIBUTE: Final = "password"
DEFAULT_DIGEST_COLUMN: Final = "password_digest"


@dataclass(frozen=True)
class SecurePasswordDisabled:
    """Model type does not manage a password digest."""


@dataclass(frozen=True)
class SecurePasswordDefault:
    """Guard active, digest stored under the default column."""


@dataclass(frozen=True)
class SecurePasswordCustom:
    """Guard active, digest stored under a caller-chosen column."""

    column_name: str

    def __post_init__(self) -> None:
        if not isinstance(self.column_name, str):
            raise TypeError(
                f"digest column name must be a string, got {type(self.column_name).__name__}"
            )
        if not self.column_name.strip():
            raise ValueError("digest column name cannot be blank")
        if self.column_name == PASSWORD_ATTRIBUTE:
            raise ValueError(f"digest column cannot be named {PASSWORD_ATTRIBUTE!r}")


SecurePassword = SecurePasswordDisabled | SecurePasswordDefault | SecurePasswordCustom

NO_SECURE_PASSWORD: Final = SecurePasswordDisabled()
DEFAULT_SECURE_PASSWORD: Final = SecurePasswordDefault()


def resolve_digest_column(capability: SecurePassword) -> str | None:
    """Return the digest column for a capability, or None when disabled."""

    match capability:
        case SecurePasswordDisabled():
            return None
        case SecurePasswordDefault():
            return DEFAULT_DIGEST_COLUMN
        case SecurePasswordCustom(column_name=column_name):
            return column_name
    raise TypeError(f"unknown secure password capability: {capability!r}")


def capability_from_flag(flag: SecurePassword | bool | str | None) -> SecurePassword:
    """Normalize a legacy boolean-or-string opt-in flag into a descriptor.

    ``None``, ``False`` and the empty string disable the guard.
    """

    if isinstance(flag, SecurePasswordDisabled | SecurePasswordDefault | SecurePasswordCustom):
        return flag
    if flag is None or flag is False or flag == "":
        return NO_SECURE_PASSWORD
    if flag is True:
        return DEFAULT_SECURE_PASSWORD
    if isinstance(flag, str):
        return SecurePasswordCustom(column_name=flag)
    raise TypeError(f"unsupported secure password flag: {flag!r}")
