"""
Unit tests for the SqlBuildError hierarchy.
"""

import pytest

from entity_sql.exceptions import (
    MalformedWhereClauseError,
    MissingJoinConditionError,
    MissingKeyColumnError,
    NullKeyValueError,
    SqlBuildError,
    UnmappedTypeError,
)


@pytest.mark.unit
class TestSqlBuildError:
    """Contextual messages and structured dicts."""

    def test_message_with_context(self):
        error = SqlBuildError("Broken", table="t_user", column="id")

        assert str(error) == "Broken (table='t_user', column='id')"
        assert error.to_dict() == {
            "error_type": "SqlBuildError",
            "message": "Broken (table='t_user', column='id')",
            "table": "t_user",
            "column": "id",
        }

    def test_message_without_context(self):
        error = SqlBuildError("Broken")

        assert str(error) == "Broken"
        assert error.to_dict() == {"error_type": "SqlBuildError", "message": "Broken"}

    def test_subclasses_share_base(self):
        for error in (
            MissingKeyColumnError("t_event"),
            NullKeyValueError("id", table="t_user"),
            MissingJoinConditionError("t_user", "t_score"),
            MalformedWhereClauseError("where (", "unbalanced"),
            UnmappedTypeError(int),
        ):
            assert isinstance(error, SqlBuildError)

    def test_null_key_carries_column(self):
        error = NullKeyValueError("id", table="t_user")

        assert error.column == "id"
        assert error.to_dict()["error_type"] == "NullKeyValueError"

    def test_join_condition_names_both_tables(self):
        message = str(MissingJoinConditionError("t_user", "t_score"))

        assert "right_table='t_score'" in message
        assert "table='t_user'" in message

    def test_malformed_where_carries_text(self):
        error = MalformedWhereClauseError("where (a=1", "unbalanced")

        assert error.sql_text == "where (a=1"
        assert error.to_dict()["sql_text"] == "where (a=1"
        assert "unbalanced" in str(error)

    def test_unmapped_type_names_type(self):
        error = UnmappedTypeError(int)

        assert error.entity_type is int
        assert "int" in str(error)
