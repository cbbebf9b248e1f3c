"""Save hooks.

Hooks are the extension points around repository writes. A repository is
given one :class:`SaveHooks` strategy at construction; it is awaited before
and after every mutation with the phase that triggered it. Typical uses are
auditing, computing derived fields and invalidating caches.
"""

import logging
from enum import Enum

import typing as t
from typing import Any

logger = logging.getLogger(__name__)


class SavePhase(str, Enum):
    """Write operation a hook is invoked for."""

    CREATE = "create"
    BULK_CREATE = "bulk_create"
    UPDATE = "update"
    DELETE = "delete"


@t.runtime_checkable
class SaveHooks(t.Protocol):
    """Strategy invoked around repository writes."""

    async def before_save(self, model: Any, phase: SavePhase) -> Any:
        """Called before the mutation.

        Must return the (possibly transformed) payload or record; the
        repository continues with the returned value.
        """
        ...

    async def after_save(
        self,
        model: Any,
        phase: SavePhase,
        extra_data: Any = None,
    ) -> Any:
        """Called after the mutation with the persisted record(s).

        The return value is what the repository operation returns.
        """
        ...


class DiagnosticSaveHooks:
    """Default hooks: trace the call and pass the model through."""

    async def before_save(self, model: Any, phase: SavePhase) -> Any:
        logger.debug(f"Before save ({phase.value})")
        return model

    async def after_save(
        self,
        model: Any,
        phase: SavePhase,
        extra_data: Any = None,
    ) -> Any:
        logger.debug(f"After save ({phase.value})")
        return model
