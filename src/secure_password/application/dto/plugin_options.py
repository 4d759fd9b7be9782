"""Pydantic model for install-time plugin options."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StrictModel(BaseModel):
    """Base model with strict unknown-field rejection."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)


class SecurePasswordOptions(StrictModel):
    """Options applied once per model collection when the plugin is installed."""

    perform_on_save: bool = Field(default=False, alias="performOnSave")


def parse_plugin_options(
    options: SecurePasswordOptions | Mapping[str, Any] | None,
) -> SecurePasswordOptions:
    """Return validated options from a model, a raw mapping, or defaults."""

    if options is None:
        return SecurePasswordOptions()
    if isinstance(options, SecurePasswordOptions):
        return options
    return SecurePasswordOptions.model_validate(dict(options))
