"""Entry point for installing the secure password plugin on a model registry."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from secure_password.application.dto.plugin_options import (
    SecurePasswordOptions,
    parse_plugin_options,
)
from secure_password.application.orm.registry import ModelRegistry
from secure_password.application.ports.password_hasher_port import PasswordHasherPort
from secure_password.config.settings import Settings, load_settings
from secure_password.infrastructure.security.password_hasher import BcryptPasswordHasher


def install(
    registry: ModelRegistry,
    options: SecurePasswordOptions | Mapping[str, Any] | None = None,
    *,
    password_hasher: PasswordHasherPort | None = None,
    settings: Settings | None = None,
) -> SecurePasswordOptions:
    """Install the guard on ``registry`` and return the options in effect.

    Omitted options and hasher fall back to environment settings.
    """

    if options is None:
        settings = settings or load_settings()
        resolved_options = SecurePasswordOptions(perform_on_save=settings.perform_on_save)
    else:
        resolved_options = parse_plugin_options(options)

    if password_hasher is None:
        settings = settings or load_settings()
        password_hasher = BcryptPasswordHasher(rounds=settings.bcrypt_rounds)

    registry.install_secure_password(options=resolved_options, password_hasher=password_hasher)
    return resolved_options
