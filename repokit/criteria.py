"""Query criteria.

A criteria is a declarative description of a query: filter conditions,
projection, related includes, ordering, grouping, transaction scope and two
shaping flags. Everything is fixed at construction and read back through the
``build_*`` accessors; :func:`repokit.query_builder.build_query` turns it
into the descriptor handed to the storage backend.

Filter conditions are opaque to this package. :class:`Operator` values are
provided so call sites can spell comparisons without importing the
backend's own operator objects::

    criteria = Criteria(
        where={"age": {Criteria.Op.GTE: 18}, "status": "active"},
        order=[("created_at", SortDirection.DESC)],
    )
"""

from enum import Enum

import typing as t
from typing import Any


class Operator(str, Enum):
    """Comparison and logical operators usable inside ``where`` conditions."""

    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    IN = "in"
    NOT_IN = "not_in"
    LIKE = "like"
    ILIKE = "ilike"
    BETWEEN = "between"
    IS_NULL = "is_null"
    AND = "and"
    OR = "or"
    NOT = "not"


class SortDirection(str, Enum):
    """Sort direction enumeration."""

    ASC = "ASC"
    DESC = "DESC"


OrderSpec = tuple[str, SortDirection | str]


class Criteria:
    """Filtering criteria used by repositories to select data.

    Subclasses describe reusable queries by filling the protected fields in
    their ``__init__``; ad-hoc queries pass them as keyword arguments.
    """

    Op: t.ClassVar[type[Operator]] = Operator

    def __init__(
        self,
        where: dict[str, Any] | None = None,
        attributes: Any = None,
        include: t.Sequence[Any] | None = None,
        order: t.Sequence[OrderSpec] | None = None,
        group: t.Sequence[str] | None = None,
        transaction: Any = None,
        sub_query: bool = False,
        distinct: bool = True,
    ) -> None:
        self._where: dict[str, Any] | None = dict(where) if where is not None else None
        self._attributes: Any = attributes
        self._include: list[Any] = list(include) if include else []
        self._order: list[OrderSpec] = list(order) if order else []
        self._group: list[str] = list(group) if group else []
        self._transaction = transaction
        self._sub_query = sub_query
        self._distinct = distinct

    @property
    def transaction(self) -> Any:
        """Transaction handle the query should run in, if any."""
        return self._transaction

    @property
    def sub_query(self) -> bool:
        """Should the limit be applied inside sub-queries?"""
        return self._sub_query

    @property
    def distinct(self) -> bool:
        """Should counting consider distinct rows only?"""
        return self._distinct

    def build_where_object(self) -> dict[str, Any] | None:
        return self._where

    def build_attributes_object(self) -> Any:
        return self._attributes

    def build_include_object(self) -> list[Any]:
        return self._include

    def build_order_object(self) -> list[OrderSpec]:
        return self._order

    def build_group_object(self) -> list[str]:
        return self._group

    def build_transaction_object(self) -> Any:
        return self._transaction

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(where={self._where!r}, "
            f"order={self._order!r}, transaction={self._transaction!r})"
        )


class IdentityCriteria(Criteria):
    """Criteria selecting a single record by its identifier."""

    def __init__(self, id: Any, transaction: Any = None) -> None:  # noqa: A002
        super().__init__(transaction=transaction)
        self._where = {"id": id}
