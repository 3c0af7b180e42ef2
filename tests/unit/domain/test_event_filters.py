"""
Name: Audit Event Filter Tests

Responsibilities:
  - WHERE clause rendering for zero / one / many filters
  - UTC normalization of time bounds
  - Guard rails on columns and operators
"""

from datetime import datetime, timedelta, timezone

import pytest

from auditdb.domain.audit import AuditOperation
from auditdb.domain.filters import (
    After,
    Before,
    ByObjectType,
    ByOperation,
    ByUser,
    WhereClause,
    build_where,
)

pytestmark = pytest.mark.unit


def test_no_filters_renders_no_where_clause():
    assert build_where([]) == ("", [])


def test_after_is_strictly_greater_than():
    at = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    where, params = build_where([After(at)])

    assert where == "WHERE ts > %s"
    assert params == [at]


def test_before_is_strictly_less_than():
    at = datetime(2024, 1, 2, tzinfo=timezone.utc)

    where, params = build_where([Before(at)])

    assert where == "WHERE ts < %s"
    assert params == [at]


def test_filters_are_joined_with_and_in_application_order():
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    end = datetime(2024, 2, 1, tzinfo=timezone.utc)

    where, params = build_where([After(start), Before(end), ByUser("alice")])

    assert where == "WHERE ts > %s AND ts < %s AND username = %s"
    assert params == [start, end, "alice"]


def test_reordering_filters_only_moves_parameters():
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    end = datetime(2024, 2, 1, tzinfo=timezone.utc)

    where_a, params_a = build_where([After(start), Before(end)])
    where_b, params_b = build_where([Before(end), After(start)])

    assert sorted(where_a.removeprefix("WHERE ").split(" AND ")) == sorted(
        where_b.removeprefix("WHERE ").split(" AND ")
    )
    assert set(params_a) == set(params_b)


def test_time_bounds_are_normalized_to_utc():
    plus_three = timezone(timedelta(hours=3))
    local = datetime(2024, 6, 1, 12, 0, tzinfo=plus_three)

    _, params = build_where([After(local)])

    assert params[0].tzinfo == timezone.utc
    assert params[0] == datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)


def test_naive_datetime_is_read_as_local_time():
    naive = datetime(2024, 6, 1, 12, 0)

    _, params = build_where([Before(naive)])

    assert params[0].tzinfo == timezone.utc
    assert params[0] == naive.astimezone(timezone.utc)


def test_equality_filters_bind_values():
    where, params = build_where(
        [ByOperation(AuditOperation.DELETE), ByObjectType("books")]
    )

    assert where == "WHERE operation = %s AND obj_type = %s"
    assert params == ["DELETE", "books"]


def test_by_operation_rejects_unknown_operation():
    with pytest.raises(ValueError):
        build_where([ByOperation("TRUNCATE")])


def test_where_clause_rejects_unknown_column():
    where = WhereClause()

    with pytest.raises(ValueError, match="unknown event column"):
        where.add("password", "=", "x")


def test_where_clause_rejects_unknown_operator():
    where = WhereClause()

    with pytest.raises(ValueError, match="unsupported operator"):
        where.add("ts", "LIKE", "x")


def test_where_clause_counts_conditions():
    where = WhereClause()
    After(datetime.now(timezone.utc)).apply(where)
    ByUser("bob").apply(where)

    assert len(where) == 2
