"""Password field guard: digest maintenance and authentication."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, cast

from secure_password.application.ports.password_hasher_port import PasswordHasherPort
from secure_password.domain.capability import PASSWORD_ATTRIBUTE
from secure_password.domain.errors import PasswordMismatchError
from secure_password.domain.password_policy import (
    DigestAction,
    PasswordValue,
    decide_digest_action,
)

if TYPE_CHECKING:
    from secure_password.application.orm.record import Record

logger = logging.getLogger(__name__)


class PasswordGuard:
    """Keep one model type's digest attribute in sync with password writes.

    In eager mode the record calls ``apply`` from its mutation method. In
    deferred mode the guard is registered as the first pre-persist step and
    ``before_save`` consumes the transient password once per save.
    """

    def __init__(
        self,
        *,
        model_name: str,
        digest_column: str,
        password_hasher: PasswordHasherPort,
        perform_on_save: bool,
    ) -> None:
        self._model_name = model_name
        self._digest_column = digest_column
        self._password_hasher = password_hasher
        self._perform_on_save = perform_on_save

    @property
    def digest_column(self) -> str:
        return self._digest_column

    @property
    def perform_on_save(self) -> bool:
        return self._perform_on_save

    def apply(self, record: Record, value: PasswordValue) -> None:
        """Update the digest attribute for one password value.

        The caller must already have removed the password attribute from the
        record so it stays cleared even if hashing raises.
        """

        action = decide_digest_action(value)
        if action is DigestAction.KEEP:
            return
        if action is DigestAction.CLEAR:
            record.set(self._digest_column, None)
            logger.info(
                "password_digest_cleared model=%s column=%s",
                self._model_name,
                self._digest_column,
            )
            return

        digest = self._password_hasher.hash_password(cast(str, value))
        record.set(self._digest_column, digest)
        logger.info(
            "password_digest_updated model=%s column=%s",
            self._model_name,
            self._digest_column,
        )

    async def before_save(self, record: Record) -> None:
        """Hash the transient password held on the record, if any."""

        # A retried save finds the attribute already gone and keeps the digest.
        self.apply(record, record.unset(PASSWORD_ATTRIBUTE))

    async def authenticate(self, record: Record, password: str | None) -> Record:
        """Return the record when the candidate matches its stored digest."""

        digest = record.get(self._digest_column)
        if not password or not digest:
            logger.info(
                "password_authentication_rejected model=%s reason=%s",
                self._model_name,
                "missing_password" if not password else "missing_digest",
            )
            raise PasswordMismatchError()

        is_valid = await asyncio.to_thread(
            self._password_hasher.verify_password,
            password=password,
            password_hash=digest,
        )
        if not is_valid:
            logger.info(
                "password_authentication_rejected model=%s reason=%s",
                self._model_name,
                "mismatch",
            )
            raise PasswordMismatchError()
        return record
