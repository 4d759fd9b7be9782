"""Ordered pre-persist steps run by ``Record.save`` before persistence."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from secure_password.application.orm.record import Record

logger = logging.getLogger(__name__)


class PrePersistStep(Protocol):
    """One save-lifecycle participant."""

    async def before_save(self, record: Record) -> None:
        """Prepare or validate the record; raise to abort the save."""


class SavePipeline:
    """Run registered pre-persist steps sequentially in registration order.

    A step that raises stops the pipeline and the error propagates to the
    caller of ``save``. Steps that already ran keep their in-memory effects on
    the record; nothing is rolled back.
    """

    def __init__(self, steps: Iterable[PrePersistStep] = ()) -> None:
        self._steps: list[PrePersistStep] = list(steps)

    @property
    def steps(self) -> tuple[PrePersistStep, ...]:
        return tuple(self._steps)

    def register(self, step: PrePersistStep) -> None:
        """Append one step after every step registered so far."""

        self._steps.append(step)

    async def run(self, record: Record) -> None:
        """Run every step against one record, stopping at the first failure."""

        for index, step in enumerate(self._steps):
            try:
                await step.before_save(record)
            except Exception:
                logger.warning(
                    "pre_persist_step_failed model=%s step=%s index=%s",
                    record.model.name,
                    type(step).__name__,
                    index,
                )
                raise
