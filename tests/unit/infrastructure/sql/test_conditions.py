"""
Unit tests for where-clause conditions and criteria rendering.
"""

import pytest

from dynamic_sql.infrastructure.sql import (
    and_,
    is_between,
    is_equal_to_when_present,
    is_greater_than_or_equal_to,
    is_in,
    is_less_than_when_present,
    is_like,
    is_not_between,
    is_not_equal_to,
    is_not_in,
    is_not_like,
    is_not_null,
    is_null,
    select,
)


def where_sql(person, column, condition, *sub_criteria):
    stmt = select(person.id).from_(person.table).where(column, condition, *sub_criteria).render()
    return stmt.sql.replace("SELECT id FROM person", "").strip(), dict(stmt.parameters)


@pytest.mark.unit
class TestComparisonConditions:
    """Tests for single- and two-value conditions."""

    @pytest.mark.parametrize(
        "condition, expected",
        [
            (is_not_equal_to(3), "WHERE id <> :p1"),
            (is_greater_than_or_equal_to(3), "WHERE id >= :p1"),
            (is_between(1, 5), "WHERE id BETWEEN :p1 AND :p2"),
            (is_not_between(1, 5), "WHERE id NOT BETWEEN :p1 AND :p2"),
        ],
    )
    def test_operators(self, person, condition, expected):
        sql, _ = where_sql(person, person.id, condition)
        assert sql == expected

    def test_like_operators(self, person):
        assert where_sql(person, person.last_name, is_like("Flint%"))[0] == "WHERE last_name LIKE :p1"
        assert where_sql(person, person.last_name, is_not_like("R%"))[0] == "WHERE last_name NOT LIKE :p1"

    def test_null_conditions_bind_nothing(self, person):
        assert where_sql(person, person.occupation, is_null()) == ("WHERE occupation IS NULL", {})
        assert where_sql(person, person.occupation, is_not_null()) == (
            "WHERE occupation IS NOT NULL",
            {},
        )


@pytest.mark.unit
class TestWhenPresentConditions:
    """Tests for the *_when_present variants."""

    def test_none_value_drops_where_clause(self, person):
        assert where_sql(person, person.first_name, is_equal_to_when_present(None)) == ("", {})

    def test_present_value_renders(self, person):
        sql, params = where_sql(person, person.id, is_less_than_when_present(4))
        assert sql == "WHERE id < :p1"
        assert params == {"p1": 4}

    def test_skipped_criterion_does_not_leave_connector(self, person):
        stmt = (
            select(person.id)
            .from_(person.table)
            .where(person.first_name, is_equal_to_when_present(None))
            .and_(person.last_name, is_like("F%"))
            .render()
        )
        assert stmt.sql == "SELECT id FROM person WHERE last_name LIKE :p1"

    def test_group_with_single_surviving_member_has_no_parentheses(self, person):
        sql, _ = where_sql(
            person,
            person.first_name,
            is_equal_to_when_present(None),
            and_(person.id, is_in(1, 2)),
        )
        assert sql == "WHERE id IN (:p1,:p2)"


@pytest.mark.unit
class TestListConditions:
    """Tests for IN / NOT IN conditions."""

    def test_in_accepts_varargs_and_collections(self, person):
        assert where_sql(person, person.id, is_in(1, 2, 3))[1] == {"p1": 1, "p2": 2, "p3": 3}
        assert where_sql(person, person.id, is_in([1, 2]))[1] == {"p1": 1, "p2": 2}

    def test_empty_list_does_not_render(self, person):
        assert where_sql(person, person.id, is_in([])) == ("", {})

    def test_not_in_with_filter(self, person):
        condition = is_not_in(1, None, 3).filter(lambda v: v is not None)
        assert where_sql(person, person.id, condition) == (
            "WHERE id NOT IN (:p1,:p2)",
            {"p1": 1, "p2": 3},
        )

    def test_filter_removing_everything_drops_clause(self, person):
        condition = is_not_in(None, None).filter(lambda v: v is not None)
        assert where_sql(person, person.id, condition) == ("", {})

    def test_map_transforms_values(self, person):
        condition = is_in(" fred ", "wilma").map(lambda v: v.strip().title())
        assert where_sql(person, person.first_name, condition) == (
            "WHERE first_name IN (:p1,:p2)",
            {"p1": "Fred", "p2": "Wilma"},
        )

    def test_filter_returns_new_condition(self):
        original = is_in(1, 2, 3)
        filtered = original.filter(lambda v: v > 1)
        assert original.values == (1, 2, 3)
        assert filtered.values == (2, 3)
