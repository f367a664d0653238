"""
SQL INSERT statement builders.

Provides single-row, multi-row and insert-if-absent statements. Column
lists and value tuples are always produced in declaration order.
"""

from typing import Any, Optional, Sequence

from entity_sql.exceptions import MalformedWhereClauseError
from entity_sql.metadata.models import EntityDescriptor
from entity_sql.sql.core.fragment import SqlFragment
from entity_sql.sql.core.identifier import quote_identifier
from entity_sql.sql.core.parameters import (
    ValueReader,
    collect_values,
    placeholders,
    render_columns,
)
from entity_sql.sql.expressions import BooleanExpressionParser
from entity_sql.sql.soft_delete import apply_soft_delete_filter
from entity_sql.sql.where import starts_with_where
from entity_sql.utils.logging import get_logger

logger = get_logger(__name__)


def build_insert(
    descriptor: EntityDescriptor,
    instance: Any,
    read_value: ValueReader,
    include_nulls: bool = False,
) -> SqlFragment:
    """
    Build ``INSERT INTO t (cols) VALUES (?...)`` for one instance.

    Args:
        descriptor: Entity being inserted
        instance: Row values
        read_value: Provider callable returning a column's value
        include_nulls: When False, columns whose value is None are left out
            so the database defaults apply

    Example:
        >>> build_insert(user, User(id=None, name="alice"), provider.read_value).text
        'INSERT INTO `t_user` (`name`) VALUES (?)'
    """
    table = descriptor.require_table()
    columns, values = collect_values(descriptor.columns, instance, read_value, include_nulls)
    fragment = SqlFragment(
        f"INSERT INTO {quote_identifier(table)} ({render_columns(columns)})"
        f" VALUES ({placeholders(len(columns))})",
        values,
    )
    logger.debug("sql.insert_built", table=table, parameter_count=len(values))
    return fragment


def build_insert_batch(
    descriptor: EntityDescriptor,
    instances: Sequence[Any],
    read_value: ValueReader,
) -> SqlFragment:
    """
    Build one multi-row INSERT for all instances.

    Null values are always included: a sparse column set computed from one
    row cannot be shared by rows whose null fields differ.

    Raises:
        ValueError: If ``instances`` is empty
    """
    if not instances:
        raise ValueError("Batch insert requires at least one instance")

    table = descriptor.require_table()
    columns = descriptor.columns
    row = f"({placeholders(len(columns))})"

    values = []
    for instance in instances:
        _, row_values = collect_values(columns, instance, read_value, include_nulls=True)
        values.extend(row_values)

    fragment = SqlFragment(
        f"INSERT INTO {quote_identifier(table)} ({render_columns(columns)})"
        f" VALUES {','.join([row] * len(instances))}",
        values,
    )
    logger.debug(
        "sql.insert_batch_built",
        table=table,
        row_count=len(instances),
        parameter_count=len(values),
    )
    return fragment


def build_insert_if_not_exists(
    descriptor: EntityDescriptor,
    instance: Any,
    read_value: ValueReader,
    where_sql: str,
    include_nulls: bool = False,
    parameters: Sequence[Any] = (),
    parser: Optional[BooleanExpressionParser] = None,
) -> SqlFragment:
    """
    Insert one row unless a live row matching ``where_sql`` already exists.

    Renders ``INSERT INTO t (cols) SELECT ?,... FROM dual WHERE NOT EXISTS
    (SELECT 1 FROM t WHERE ... LIMIT 1)``.

    Args:
        where_sql: Existence predicate, with or without the WHERE keyword
        parameters: Values for the placeholders in ``where_sql``; they bind
            after the inserted values

    Raises:
        MalformedWhereClauseError: If ``where_sql`` is empty or fails to parse
    """
    if where_sql is None or not where_sql.strip():
        raise MalformedWhereClauseError(where_sql or "", "existence predicate is required")

    table = descriptor.require_table()
    columns, values = collect_values(descriptor.columns, instance, read_value, include_nulls)

    where_sql = where_sql.strip()
    if not starts_with_where(where_sql):
        where_sql = f"WHERE {where_sql}"
    where_sql = apply_soft_delete_filter(where_sql, descriptor, parser)

    quoted_table = quote_identifier(table)
    fragment = SqlFragment(
        f"INSERT INTO {quoted_table} ({render_columns(columns)})"
        f" SELECT {placeholders(len(columns))} FROM dual"
        f" WHERE NOT EXISTS (SELECT 1 FROM {quoted_table}{where_sql} LIMIT 1)",
        list(values) + list(parameters),
    )
    logger.debug(
        "sql.insert_if_not_exists_built",
        table=table,
        parameter_count=len(fragment.parameters),
    )
    return fragment
