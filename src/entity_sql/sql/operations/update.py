"""
SQL UPDATE statement builders.

All updates are scoped to one row by its key columns and to live rows by
the soft-delete filter. Parameters follow the text: SET values first, then
key values, then any caller-supplied values.
"""

from datetime import datetime
from typing import Any, Callable, Optional, Sequence, Union

from entity_sql.exceptions import SqlBuildError
from entity_sql.metadata.models import EntityDescriptor
from entity_sql.sql.core.fragment import NOTHING_TO_UPDATE, NothingToUpdate, SqlFragment
from entity_sql.sql.core.identifier import quote_identifier
from entity_sql.sql.core.parameters import ValueReader, bind_key_predicates, collect_values
from entity_sql.sql.expressions import BooleanExpressionParser
from entity_sql.sql.soft_delete import apply_soft_delete_filter
from entity_sql.sql.where import WHERE_KEYWORD
from entity_sql.utils.logging import get_logger

logger = get_logger(__name__)

Clock = Callable[[], datetime]


def _assignments(columns: Sequence[Any]) -> str:
    return ",".join(f"{quote_identifier(c.name)}=?" for c in columns)


def timestamp_assignments(descriptor: EntityDescriptor, clock: Clock) -> SqlFragment:
    """``,col=?`` for each update-timestamp column, bound to ``clock()``."""
    columns = descriptor.update_timestamp_columns
    if not columns:
        return SqlFragment()
    now = clock()
    return SqlFragment("," + _assignments(columns), [now] * len(columns))


def _join_post_sql(where_sql: str, post_sql: Optional[str]) -> str:
    if post_sql is None or not post_sql.strip():
        return where_sql
    post_sql = post_sql.strip()
    if WHERE_KEYWORD.match(post_sql):
        return f"{where_sql} AND {post_sql[len('where'):].strip()}"
    return f"{where_sql} {post_sql}"


def build_update(
    descriptor: EntityDescriptor,
    instance: Any,
    read_value: ValueReader,
    with_null: bool = False,
    post_sql: Optional[str] = None,
    parameters: Sequence[Any] = (),
    parser: Optional[BooleanExpressionParser] = None,
) -> Union[SqlFragment, NothingToUpdate]:
    """
    Build ``UPDATE t SET col=?,... WHERE key=?`` from an instance.

    Args:
        with_null: Also set non-key columns whose value is None
        post_sql: Extra predicate; a leading WHERE keyword becomes AND
        parameters: Values for the placeholders in ``post_sql``

    Returns:
        The statement, or NOTHING_TO_UPDATE when no column would be set

    Raises:
        MissingKeyColumnError: If the entity declares no key column
        NullKeyValueError: If any key value is None
    """
    table = descriptor.require_table()
    descriptor.require_key_columns()

    columns, values = collect_values(
        descriptor.non_key_columns, instance, read_value, include_nulls=with_null
    )
    if not columns:
        logger.info("sql.update_skipped", table=table, reason="no_columns_to_set")
        return NOTHING_TO_UPDATE

    keys = bind_key_predicates(descriptor, instance, read_value)
    where_sql = _join_post_sql(f"WHERE {keys.text}", post_sql)

    fragment = SqlFragment(
        f"UPDATE {quote_identifier(table)} SET {_assignments(columns)}"
        + apply_soft_delete_filter(where_sql, descriptor, parser),
        list(values) + list(keys.parameters) + list(parameters),
    )
    logger.debug("sql.update_built", table=table, parameter_count=len(fragment.parameters))
    return fragment


def build_custom_update(
    descriptor: EntityDescriptor,
    instance: Any,
    read_value: ValueReader,
    set_sql: str,
    parameters: Sequence[Any] = (),
    clock: Clock = datetime.now,
    parser: Optional[BooleanExpressionParser] = None,
) -> SqlFragment:
    """
    Build ``UPDATE t SET <set_sql>[,ts=?] WHERE key=?`` for one row.

    Update-timestamp columns are appended to the caller's SET body and bound
    to the clock's current time.

    Args:
        set_sql: SET body without the SET keyword, e.g. ``count=count+1``
        parameters: Values for the placeholders in ``set_sql``
        clock: Source of the update timestamp

    Raises:
        MissingKeyColumnError: If the entity declares no key column
        NullKeyValueError: If any key value is None
    """
    table = descriptor.require_table()
    if set_sql is None or not set_sql.strip():
        raise SqlBuildError("Custom update requires a SET body", table=table)

    keys = bind_key_predicates(descriptor, instance, read_value)
    head = SqlFragment(f"UPDATE {quote_identifier(table)} SET {set_sql.strip()}", parameters)
    head = head + timestamp_assignments(descriptor, clock)

    fragment = head + SqlFragment(
        apply_soft_delete_filter(f"WHERE {keys.text}", descriptor, parser),
        keys.parameters,
    )
    logger.debug("sql.custom_update_built", table=table, parameter_count=len(fragment.parameters))
    return fragment


def build_soft_delete(
    descriptor: EntityDescriptor,
    instance: Any,
    read_value: ValueReader,
    clock: Clock = datetime.now,
    parser: Optional[BooleanExpressionParser] = None,
) -> SqlFragment:
    """
    Logically delete one row by setting its marker to the deleted state.

    Raises:
        SqlBuildError: If the entity declares no soft-delete column
    """
    spec = descriptor.require_soft_delete()
    set_sql = f"{quote_identifier(spec.column_name)}={spec.deleted_value}"
    return build_custom_update(
        descriptor, instance, read_value, set_sql, clock=clock, parser=parser
    )
