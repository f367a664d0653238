"""
Unit tests for SQL core utilities: identifiers, fragments and parameters.
"""

import pytest

from entity_sql.exceptions import MissingKeyColumnError, NullKeyValueError
from entity_sql.metadata import ColumnDescriptor
from entity_sql.sql.core.fragment import NOTHING_TO_UPDATE, NothingToUpdate, SqlFragment
from entity_sql.sql.core.identifier import qualify_column, quote_identifier
from entity_sql.sql.core.parameters import (
    bind_key_predicates,
    collect_values,
    key_predicates,
    placeholders,
    render_columns,
    require_non_null_keys,
)
from samples import EVENT, USER, User


def read_attr(column, instance):
    return getattr(instance, column.attribute)


@pytest.mark.unit
class TestQuoteIdentifier:
    """Tests for quote_identifier and qualify_column."""

    def test_quote_ascii_column(self):
        """Identifiers are wrapped in backticks."""
        assert quote_identifier("company_id") == "`company_id`"

    def test_quote_unicode_column(self):
        """Non-ASCII names are quoted the same way."""
        assert quote_identifier("年金计划号") == "`年金计划号`"

    def test_quote_with_internal_backtick(self):
        """Internal backticks are doubled."""
        assert quote_identifier("column`name") == "`column``name`"

    def test_qualify_with_alias(self):
        assert qualify_column("deleted", alias="t1") == "t1.`deleted`"

    def test_qualify_without_alias(self):
        assert qualify_column("deleted") == "`deleted`"


@pytest.mark.unit
class TestSqlFragment:
    """Tests for SqlFragment composition."""

    def test_concatenation_keeps_order(self):
        """Text and parameters concatenate left to right."""
        head = SqlFragment("SET `a`=?", ["x"])
        tail = SqlFragment(" WHERE `id`=?", [1])

        combined = head + tail

        assert combined.text == "SET `a`=? WHERE `id`=?"
        assert combined.parameters == ("x", 1)

    def test_add_plain_text(self):
        fragment = SqlFragment("SELECT 1", ()) + " limit 1"
        assert fragment == SqlFragment("SELECT 1 limit 1")

    def test_parameters_are_immutable_tuple(self):
        values = [1, 2]
        fragment = SqlFragment("?,?", values)
        values.append(3)

        assert fragment.parameters == (1, 2)

    def test_placeholder_count(self):
        assert SqlFragment("`a`=? AND `b`=?", (1, 2)).placeholder_count == 2

    def test_bind_returns_fresh_list(self):
        text, params = SqlFragment("`a`=?", (1,)).bind()
        params.append(2)

        assert text == "`a`=?"
        assert params == [1, 2]

    def test_empty(self):
        assert SqlFragment.empty() == SqlFragment("", ())


@pytest.mark.unit
class TestNothingToUpdate:
    """Tests for the no-op update sentinel."""

    def test_is_singleton(self):
        assert NothingToUpdate() is NOTHING_TO_UPDATE

    def test_is_falsy_and_not_a_fragment(self):
        assert not NOTHING_TO_UPDATE
        assert not isinstance(NOTHING_TO_UPDATE, SqlFragment)


@pytest.mark.unit
class TestParameters:
    """Tests for column rendering and value collection."""

    def test_render_columns(self):
        columns = [ColumnDescriptor("id"), ColumnDescriptor("name")]
        assert render_columns(columns) == "`id`,`name`"
        assert render_columns(columns, alias="t2") == "t2.`id`,t2.`name`"

    def test_placeholders(self):
        assert placeholders(3) == "?,?,?"
        assert placeholders(0) == ""

    def test_collect_values_skips_nulls(self):
        """Sparse collection drops None-valued columns and their values."""
        user = User(id=None, name="alice", age=None, deleted=0)

        columns, values = collect_values(USER.columns, user, read_attr, include_nulls=False)

        assert [c.name for c in columns] == ["name", "deleted"]
        assert values == ["alice", 0]

    def test_collect_values_with_nulls(self):
        user = User(name="alice")

        columns, values = collect_values(USER.columns, user, read_attr, include_nulls=True)

        assert len(columns) == len(USER.columns)
        assert values == [None, "alice", None, None, None]

    def test_key_predicates(self):
        columns = [ColumnDescriptor("id"), ColumnDescriptor("tenant")]
        assert key_predicates(columns) == "`id`=? AND `tenant`=?"

    def test_require_non_null_keys_names_column(self):
        with pytest.raises(NullKeyValueError) as exc_info:
            require_non_null_keys([ColumnDescriptor("id")], [None], table="t_user")

        assert exc_info.value.column == "id"
        assert "t_user" in str(exc_info.value)

    def test_bind_key_predicates(self):
        fragment = bind_key_predicates(USER, User(id=9), read_attr)
        assert fragment == SqlFragment("`id`=?", (9,))

    def test_bind_key_predicates_without_keys(self):
        with pytest.raises(MissingKeyColumnError):
            bind_key_predicates(EVENT, object(), read_attr)
