"""Tests for criteria compilation."""

import pytest

from repokit.criteria import Criteria, IdentityCriteria, SortDirection
from repokit.query_builder import build_query


@pytest.mark.unit
class TestBuildQuery:
    def test_none_compiles_to_empty_descriptor(self) -> None:
        assert build_query(None) == {}

    def test_empty_criteria_only_has_flags(self) -> None:
        assert build_query(Criteria()) == {"sub_query": False, "distinct": True}

    def test_empty_sequences_are_dropped(self) -> None:
        criteria = Criteria(include=[], order=[], group=[])

        assert build_query(criteria) == {"sub_query": False, "distinct": True}

    def test_full_criteria(self) -> None:
        transaction = object()
        criteria = Criteria(
            where={"status": "active"},
            attributes=["id", "name"],
            include=["profile"],
            order=[("name", SortDirection.DESC)],
            group=["status"],
            transaction=transaction,
            sub_query=True,
            distinct=False,
        )

        descriptor = build_query(criteria)

        assert descriptor == {
            "where": {"status": "active"},
            "attributes": ["id", "name"],
            "include": ["profile"],
            "order": [("name", SortDirection.DESC)],
            "group": ["status"],
            "transaction": transaction,
            "sub_query": True,
            "distinct": False,
        }
        assert descriptor["transaction"] is transaction

    def test_empty_where_mapping_is_kept(self) -> None:
        descriptor = build_query(Criteria(where={}))

        assert descriptor["where"] == {}

    def test_none_flags_fall_back_to_defaults(self) -> None:
        class LooseCriteria(Criteria):
            def __init__(self) -> None:
                super().__init__()
                self._sub_query = None
                self._distinct = None

        descriptor = build_query(LooseCriteria())

        assert descriptor["sub_query"] is False
        assert descriptor["distinct"] is True

    def test_identity_criteria(self) -> None:
        transaction = object()

        descriptor = build_query(IdentityCriteria("42", transaction))

        assert descriptor == {
            "where": {"id": "42"},
            "transaction": transaction,
            "sub_query": False,
            "distinct": True,
        }

    def test_criteria_is_not_mutated(self) -> None:
        criteria = Criteria(where={"a": 1}, order=[("a", "ASC")])

        descriptor = build_query(criteria)
        descriptor["where"]["b"] = 2
        descriptor["order"].append(("b", "DESC"))
        descriptor["offset"] = 10

        assert criteria.build_where_object() == {"a": 1}
        assert criteria.build_order_object() == [("a", "ASC")]
        assert build_query(criteria) == {
            "where": {"a": 1},
            "order": [("a", "ASC")],
            "sub_query": False,
            "distinct": True,
        }
