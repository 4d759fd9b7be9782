from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from secure_password.application.dto.plugin_options import SecurePasswordOptions
from secure_password.application.orm.registry import ModelRegistry, PluginAlreadyInstalledError
from secure_password.config.settings import Settings
from secure_password.domain.capability import (
    DEFAULT_SECURE_PASSWORD,
    NO_SECURE_PASSWORD,
    SecurePasswordCustom,
)
from secure_password.infrastructure.security.password_hasher import BcryptPasswordHasher
from secure_password.plugin import install


class FakeRecordStore:
    async def persist(
        self,
        *,
        model_name: str,
        primary_key: str,
        attributes: Mapping[str, Any],
    ) -> dict[str, Any]:
        _ = (model_name, primary_key, attributes)
        return {}


def _settings(*, perform_on_save: bool = False, bcrypt_rounds: int = 4) -> Settings:
    return Settings(
        _env_file=None,
        SECURE_PASSWORD_PERFORM_ON_SAVE=perform_on_save,
        SECURE_PASSWORD_BCRYPT_ROUNDS=bcrypt_rounds,
    )


def test_install_with_mapping_options_selects_deferred_mode() -> None:
    registry = ModelRegistry(store=FakeRecordStore())

    options = install(
        registry,
        {"performOnSave": True},
        password_hasher=BcryptPasswordHasher(rounds=4),
    )

    assert options == SecurePasswordOptions(perform_on_save=True)
    assert registry.secure_password_options == options
    model = registry.define_model("users", secure_password=True)
    assert model.password_guard is not None
    assert model.password_guard.perform_on_save is True


def test_install_falls_back_to_settings_for_options_and_hasher() -> None:
    registry = ModelRegistry(store=FakeRecordStore())

    options = install(registry, settings=_settings(perform_on_save=True, bcrypt_rounds=5))

    assert options.perform_on_save is True
    user = registry.define_model("users", secure_password=True).new(password="x")
    assert user.get("password") == "x"


def test_install_builds_bcrypt_hasher_with_configured_rounds() -> None:
    registry = ModelRegistry(store=FakeRecordStore())
    install(registry, SecurePasswordOptions(), settings=_settings(bcrypt_rounds=5))

    user = registry.define_model("users", secure_password=True).new(password="testing")

    assert user.get("password_digest").startswith("$2b$05$")


def test_installing_twice_on_one_registry_is_rejected() -> None:
    registry = ModelRegistry(store=FakeRecordStore())
    hasher = BcryptPasswordHasher(rounds=4)
    install(registry, password_hasher=hasher, settings=_settings())

    with pytest.raises(PluginAlreadyInstalledError):
        install(registry, password_hasher=hasher, settings=_settings())


def test_models_defined_before_install_have_no_guard() -> None:
    registry = ModelRegistry(store=FakeRecordStore())
    early = registry.define_model("early", secure_password=True)
    install(registry, password_hasher=BcryptPasswordHasher(rounds=4), settings=_settings())
    late = registry.define_model("late", secure_password=True)

    assert early.password_guard is None
    assert late.password_guard is not None


@pytest.mark.parametrize(
    ("flag", "capability", "digest_column"),
    [
        (None, NO_SECURE_PASSWORD, None),
        (True, DEFAULT_SECURE_PASSWORD, "password_digest"),
        ("hash", SecurePasswordCustom("hash"), "hash"),
        (SecurePasswordCustom("hash"), SecurePasswordCustom("hash"), "hash"),
    ],
)
def test_digest_column_is_resolved_when_the_model_is_defined(
    flag: object,
    capability: object,
    digest_column: str | None,
) -> None:
    registry = ModelRegistry(store=FakeRecordStore())
    install(registry, password_hasher=BcryptPasswordHasher(rounds=4), settings=_settings())

    model = registry.define_model("users", secure_password=flag)  # type: ignore[arg-type]

    assert model.capability == capability
    guard = model.password_guard
    assert (guard.digest_column if guard is not None else None) == digest_column


def test_duplicate_model_names_are_rejected() -> None:
    registry = ModelRegistry(store=FakeRecordStore())
    registry.define_model("users")

    with pytest.raises(ValueError):
        registry.define_model("users")


def test_get_model_returns_defined_model_or_raises_lookup_error() -> None:
    registry = ModelRegistry(store=FakeRecordStore())
    model = registry.define_model("users")

    assert registry.get_model("users") is model
    with pytest.raises(LookupError):
        registry.get_model("missing")


@pytest.mark.parametrize(
    ("flag", "primary_key"),
    [("id", "id"), (True, "password_digest")],
)
def test_digest_column_colliding_with_primary_key_is_rejected(
    flag: object,
    primary_key: str,
) -> None:
    registry = ModelRegistry(store=FakeRecordStore())
    install(registry, password_hasher=BcryptPasswordHasher(rounds=4), settings=_settings())

    with pytest.raises(ValueError, match="primary key"):
        registry.define_model(
            "users",
            secure_password=flag,  # type: ignore[arg-type]
            primary_key=primary_key,
        )
