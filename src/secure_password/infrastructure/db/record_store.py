"""SQLAlchemy adapter for persisting records into mapped tables."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from secure_password.application.ports.record_store_port import RecordStorePort
from secure_password.domain.capability import PASSWORD_ATTRIBUTE

logger = logging.getLogger(__name__)


class UnmappedModelError(LookupError):
    """Raised when a record is saved for a model without a mapped table."""

    def __init__(self, *, model_name: str) -> None:
        super().__init__(f"no table mapped for model: {model_name}")
        self.model_name = model_name


class SqlAlchemyRecordStore(RecordStorePort):
    """Record store backed by SQLAlchemy async sessions.

    Only attributes that match a column of the mapped table are written. The
    plaintext ``password`` attribute is never written even when a column with
    that name exists.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        tables: Mapping[str, sa.Table],
    ) -> None:
        self._session_factory = session_factory
        self._tables = dict(tables)

    async def persist(
        self,
        *,
        model_name: str,
        primary_key: str,
        attributes: Mapping[str, Any],
    ) -> dict[str, Any]:
        """Update the row matching the primary key, or insert a new row."""

        table = self._tables.get(model_name)
        if table is None:
            raise UnmappedModelError(model_name=model_name)

        values = {
            key: value
            for key, value in attributes.items()
            if key in table.c and key != PASSWORD_ATTRIBUTE
        }
        pk_value = values.get(primary_key)

        async with self._session_factory() as session:
            async with session.begin():
                if pk_value is not None:
                    update_result = await session.execute(
                        sa.update(table)
                        .where(table.c[primary_key] == pk_value)
                        .values(**values)
                    )
                    if update_result.rowcount:
                        logger.info(
                            "record_store_updated table=%s id=%s", table.name, pk_value
                        )
                        return {}

                insert_result = await session.execute(sa.insert(table).values(**values))

        if pk_value is not None:
            logger.info("record_store_inserted table=%s id=%s", table.name, pk_value)
            return {}

        inserted_pk = insert_result.inserted_primary_key
        assigned_id = inserted_pk[0] if inserted_pk else None
        logger.info("record_store_inserted table=%s id=%s", table.name, assigned_id)
        return {primary_key: assigned_id}
