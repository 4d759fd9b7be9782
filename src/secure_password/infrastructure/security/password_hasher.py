"""Bcrypt password hasher adapter."""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Final

import bcrypt

from secure_password.application.ports.password_hasher_port import PasswordHasherPort

DEFAULT_ROUNDS: Final = 12
SHA256_DIGEST_PREFIX: Final = "$bcrypt-sha256$"
_BCRYPT_MAX_BYTES: Final = 72
_PREHASH_KEY: Final = b"secure-password:bcrypt-sha256"


class BcryptPasswordHasher(PasswordHasherPort):
    """Password hashing adapter using bcrypt.

    Passwords longer than bcrypt's 72-byte limit are HMAC-SHA256 pre-hashed and
    their digest is tagged with ``$bcrypt-sha256$``. Verification branches on the
    tag, so a pre-hash value never verifies against a plain bcrypt digest or the
    other way round.
    """

    def __init__(self, *, rounds: int = DEFAULT_ROUNDS) -> None:
        if not 4 <= rounds <= 31:
            raise ValueError(f"bcrypt rounds must be between 4 and 31, got {rounds}")
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash_password(self, password: str) -> str:
        encoded = password.encode("utf-8")
        salt = bcrypt.gensalt(rounds=self._rounds)
        if len(encoded) <= _BCRYPT_MAX_BYTES:
            return bcrypt.hashpw(encoded, salt).decode("utf-8")
        digest = bcrypt.hashpw(_prehash(encoded), salt).decode("utf-8")
        return f"{SHA256_DIGEST_PREFIX}{digest}"

    def verify_password(self, *, password: str, password_hash: str) -> bool:
        encoded = password.encode("utf-8")
        if password_hash.startswith(SHA256_DIGEST_PREFIX):
            candidate = _prehash(encoded)
            stored = password_hash.removeprefix(SHA256_DIGEST_PREFIX)
        elif len(encoded) > _BCRYPT_MAX_BYTES:
            return False
        else:
            candidate = encoded
            stored = password_hash
        try:
            return bcrypt.checkpw(candidate, stored.encode("utf-8"))
        except ValueError:
            return False


def _prehash(encoded: bytes) -> bytes:
    return base64.b64encode(hmac.new(_PREHASH_KEY, encoded, hashlib.sha256).digest())
