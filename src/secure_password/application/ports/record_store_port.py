"""Port for the persistence collaborator behind ``Record.save``."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol


class RecordStorePort(Protocol):
    """Record persistence contract provided by the host ORM or database layer."""

    async def persist(
        self,
        *,
        model_name: str,
        primary_key: str,
        attributes: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Insert or update one record and return attributes assigned by the store."""
