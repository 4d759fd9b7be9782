"""Mutable record whose writes are routed through one explicit mutation method."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from secure_password.domain.capability import PASSWORD_ATTRIBUTE
from secure_password.domain.errors import UnsupportedOperationError
from secure_password.domain.password_policy import UNSET, decide_digest_action

if TYPE_CHECKING:
    from secure_password.application.orm.registry import ModelType

logger = logging.getLogger(__name__)


class Record:
    """Key-value entity bound to one model type."""

    def __init__(self, model: ModelType, attributes: Mapping[str, Any] | None = None) -> None:
        self._model = model
        self._attributes: dict[str, Any] = {}
        if attributes:
            self.set_many(attributes)

    def __repr__(self) -> str:
        return f"<Record model={self._model.name} keys={sorted(self._attributes)}>"

    @property
    def model(self) -> ModelType:
        return self._model

    @property
    def attributes(self) -> dict[str, Any]:
        """Return a snapshot copy of the current attributes."""

        return dict(self._attributes)

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._attributes

    def set(self, key: str, value: Any = UNSET) -> Record:
        """Write one attribute; omitting ``value`` leaves the record untouched."""

        return self.set_many({key: value})

    def set_many(self, values: Mapping[str, Any]) -> Record:
        """Write several attributes, intercepting the plaintext password."""

        pending = {key: value for key, value in values.items() if value is not UNSET}
        guard = self._model.password_guard
        if guard is None or PASSWORD_ATTRIBUTE not in values:
            self._attributes.update(pending)
            return self

        password = values[PASSWORD_ATTRIBUTE]
        pending.pop(PASSWORD_ATTRIBUTE, None)
        # Rejects non-string values before anything is written.
        decide_digest_action(password)
        self._attributes.update(pending)

        if guard.perform_on_save:
            if password is not UNSET:
                self._attributes[PASSWORD_ATTRIBUTE] = password
            return self

        self._attributes.pop(PASSWORD_ATTRIBUTE, None)
        guard.apply(self, password)
        return self

    def unset(self, key: str) -> Any:
        """Remove one attribute and return its value, or ``UNSET`` when absent."""

        return self._attributes.pop(key, UNSET)

    async def save(self) -> Record:
        """Run the model's pre-persist steps, then hand attributes to the store."""

        await self._model.save_pipeline.run(self)
        assigned = await self._model.store.persist(
            model_name=self._model.name,
            primary_key=self._model.primary_key,
            attributes=self.attributes,
        )
        self._attributes.update(assigned)
        logger.info(
            "record_saved model=%s id=%s",
            self._model.name,
            self._attributes.get(self._model.primary_key),
        )
        return self

    async def authenticate(self, password: str | None = None) -> Record:
        """Resolve to this record when ``password`` matches the stored digest."""

        guard = self._model.password_guard
        if guard is None:
            raise UnsupportedOperationError(model_name=self._model.name, operation="authenticate")
        return await guard.authenticate(self, password)
