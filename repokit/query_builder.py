"""Criteria compilation.

Turns a :class:`~repokit.criteria.Criteria` into the backend-neutral query
descriptor consumed by model handles. The descriptor only carries the keys
that hold something: ``where``/``attributes``/``transaction`` are dropped
when ``None``, ``include``/``order``/``group`` when ``None`` or empty.
``sub_query`` and ``distinct`` are always present.
"""

import typing as t
from typing import Any, TypedDict

from .criteria import Criteria

DEFAULT_SUB_QUERY = False
DEFAULT_DISTINCT = True

_OPTIONAL_OBJECT_KEYS = ("where", "attributes", "transaction")
_OPTIONAL_SEQUENCE_KEYS = ("include", "order", "group")


class QueryDescriptor(TypedDict, total=False):
    """Query descriptor handed to the storage backend."""

    where: dict[str, Any]
    attributes: Any
    include: list[Any]
    order: list[Any]
    group: list[str]
    transaction: Any
    sub_query: bool
    distinct: bool
    offset: int
    limit: int


def _copy(value: Any) -> Any:
    if isinstance(value, dict):
        return dict(value)
    if isinstance(value, list | tuple):
        return list(value)
    return value


def build_query(criteria: Criteria | None) -> QueryDescriptor:
    """Compile a criteria into a query descriptor.

    The criteria is only read, never modified; containers are copied so the
    returned descriptor can be extended (pagination) safely.

    Args:
        criteria: The criteria to compile, or None

    Returns:
        The query descriptor, empty when no criteria was given
    """
    if criteria is None:
        return QueryDescriptor()

    sub_query = criteria.sub_query
    distinct = criteria.distinct
    values: dict[str, Any] = {
        "where": criteria.build_where_object(),
        "attributes": criteria.build_attributes_object(),
        "include": criteria.build_include_object(),
        "order": criteria.build_order_object(),
        "group": criteria.build_group_object(),
        "transaction": criteria.transaction,
    }

    descriptor: dict[str, Any] = {}
    for key in _OPTIONAL_OBJECT_KEYS:
        if values[key] is not None:
            # transaction handles must keep their identity
            descriptor[key] = (
                values[key] if key == "transaction" else _copy(values[key])
            )
    for key in _OPTIONAL_SEQUENCE_KEYS:
        if values[key]:
            descriptor[key] = _copy(values[key])

    descriptor["sub_query"] = DEFAULT_SUB_QUERY if sub_query is None else sub_query
    descriptor["distinct"] = DEFAULT_DISTINCT if distinct is None else distinct

    return t.cast(QueryDescriptor, descriptor)
