"""Storage collaborator protocols.

The storage backend is not part of repokit. These protocols describe what a
repository needs from it: a per-model handle executing query descriptors,
record instances able to save and destroy themselves, and a provider
resolving model names to handles.
"""

import typing as t
from typing import Any

from .query_builder import QueryDescriptor


@t.runtime_checkable
class Record(t.Protocol):
    """A persisted record returned by a model handle."""

    def to_dict(self) -> dict[str, Any]: ...

    async def save(self) -> Any: ...

    async def destroy(self) -> Any: ...


@t.runtime_checkable
class ModelHandle(t.Protocol):
    """Per-model executor provided by the storage backend."""

    async def find_all(self, descriptor: QueryDescriptor) -> list[Any]: ...

    async def find_one(self, descriptor: QueryDescriptor) -> Any | None: ...

    async def find_and_count_all(
        self,
        descriptor: QueryDescriptor,
    ) -> tuple[list[Any], int]: ...

    async def create(self, payload: dict[str, Any], options: dict[str, Any]) -> Any: ...

    async def bulk_create(
        self,
        payloads: list[dict[str, Any]],
        options: dict[str, Any],
    ) -> list[Any]: ...


@t.runtime_checkable
class ModelProvider(t.Protocol):
    """Resolves a model name to its backend handle."""

    def get(self, name: str) -> ModelHandle | None: ...


class ModelCatalog:
    """Dict-backed model provider.

    Filled once at startup with the handles of the configured backend.
    """

    def __init__(self, models: t.Mapping[str, ModelHandle] | None = None) -> None:
        self._models: dict[str, ModelHandle] = dict(models or {})

    def register(self, name: str, handle: ModelHandle) -> None:
        self._models[name] = handle

    def get(self, name: str) -> ModelHandle | None:
        return self._models.get(name)

    def names(self) -> list[str]:
        return list(self._models)

    def __contains__(self, name: object) -> bool:
        return name in self._models
