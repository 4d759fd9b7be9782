"""Model collection where model types are defined and the plugin is installed."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from secure_password.application.dto.plugin_options import SecurePasswordOptions
from secure_password.application.orm.record import Record
from secure_password.application.ports.password_hasher_port import PasswordHasherPort
from secure_password.application.ports.record_store_port import RecordStorePort
from secure_password.application.services.password_guard import PasswordGuard
from secure_password.application.services.save_pipeline import SavePipeline
from secure_password.domain.capability import (
    NO_SECURE_PASSWORD,
    SecurePassword,
    capability_from_flag,
    resolve_digest_column,
)

logger = logging.getLogger(__name__)


class PluginAlreadyInstalledError(RuntimeError):
    """Raised when the secure password plugin is installed twice on one registry."""

    def __init__(self) -> None:
        super().__init__("secure password plugin is already installed on this registry")


class ModelType:
    """One record type: its name, capability, guard, and save pipeline."""

    def __init__(
        self,
        *,
        name: str,
        primary_key: str,
        capability: SecurePassword,
        password_guard: PasswordGuard | None,
        store: RecordStorePort,
    ) -> None:
        self.name = name
        self.primary_key = primary_key
        self.capability = capability
        self.password_guard = password_guard
        self.store = store
        self.save_pipeline = SavePipeline()
        if password_guard is not None and password_guard.perform_on_save:
            self.save_pipeline.register(password_guard)

    def __repr__(self) -> str:
        return f"<ModelType name={self.name} capability={self.capability!r}>"

    def new(self, attributes: Mapping[str, Any] | None = None, /, **values: Any) -> Record:
        """Build a record, routing initial attributes through the mutation method."""

        merged = {**(attributes or {}), **values}
        return Record(self, merged)


class ModelRegistry:
    """Collection of model types sharing one record store and plugin setup."""

    def __init__(self, *, store: RecordStorePort) -> None:
        self._store = store
        self._models: dict[str, ModelType] = {}
        self._options: SecurePasswordOptions | None = None
        self._password_hasher: PasswordHasherPort | None = None

    @property
    def secure_password_options(self) -> SecurePasswordOptions | None:
        return self._options

    def install_secure_password(
        self,
        *,
        options: SecurePasswordOptions,
        password_hasher: PasswordHasherPort,
    ) -> None:
        """Enable the guard for model types defined from now on."""

        if self._options is not None:
            raise PluginAlreadyInstalledError()
        self._options = options
        self._password_hasher = password_hasher
        logger.info("secure_password_installed perform_on_save=%s", options.perform_on_save)

    def define_model(
        self,
        name: str,
        *,
        secure_password: SecurePassword | bool | str | None = NO_SECURE_PASSWORD,
        primary_key: str = "id",
    ) -> ModelType:
        """Register one model type and resolve its digest column."""

        if name in self._models:
            raise ValueError(f"model already defined: {name}")

        capability = capability_from_flag(secure_password)
        digest_column = resolve_digest_column(capability)
        if digest_column is not None and digest_column == primary_key:
            raise ValueError(f"digest column cannot be the primary key: {primary_key}")
        guard: PasswordGuard | None = None
        if digest_column is not None:
            if self._options is None or self._password_hasher is None:
                logger.warning(
                    "secure_password_not_installed model=%s capability ignored",
                    name,
                )
            else:
                guard = PasswordGuard(
                    model_name=name,
                    digest_column=digest_column,
                    password_hasher=self._password_hasher,
                    perform_on_save=self._options.perform_on_save,
                )

        model = ModelType(
            name=name,
            primary_key=primary_key,
            capability=capability,
            password_guard=guard,
            store=self._store,
        )
        self._models[name] = model
        return model

    def get_model(self, name: str) -> ModelType:
        """Return a defined model type or raise ``LookupError``."""

        try:
            return self._models[name]
        except KeyError:
            raise LookupError(f"model not defined: {name}") from None
