"""
SQL DELETE statement builders, physical and logical.
"""

from datetime import datetime
from typing import Any, Optional, Sequence

from entity_sql.metadata.models import EntityDescriptor
from entity_sql.sql.core.fragment import SqlFragment
from entity_sql.sql.core.identifier import quote_identifier
from entity_sql.sql.core.parameters import ValueReader, bind_key_predicates
from entity_sql.sql.expressions import BooleanExpressionParser
from entity_sql.sql.operations.update import Clock, timestamp_assignments
from entity_sql.sql.soft_delete import apply_soft_delete_filter
from entity_sql.utils.logging import get_logger

logger = get_logger(__name__)


def build_delete(
    descriptor: EntityDescriptor,
    instance: Any,
    read_value: ValueReader,
    parser: Optional[BooleanExpressionParser] = None,
) -> SqlFragment:
    """
    Build ``DELETE FROM t WHERE key=?`` for one row.

    Raises:
        MissingKeyColumnError: If the entity declares no key column
        NullKeyValueError: If any key value is None
    """
    table = descriptor.require_table()
    keys = bind_key_predicates(descriptor, instance, read_value)
    fragment = SqlFragment(
        f"DELETE FROM {quote_identifier(table)}"
        + apply_soft_delete_filter(f"WHERE {keys.text}", descriptor, parser),
        keys.parameters,
    )
    logger.debug("sql.delete_built", table=table, parameter_count=len(fragment.parameters))
    return fragment


def build_custom_delete(
    descriptor: EntityDescriptor,
    post_sql: Optional[str] = None,
    parameters: Sequence[Any] = (),
    parser: Optional[BooleanExpressionParser] = None,
) -> SqlFragment:
    """
    Build ``DELETE FROM t <post_sql>``; the caller owns the predicate.

    No key validation is done, so an empty ``post_sql`` on an entity without
    soft delete deletes every row.
    """
    table = descriptor.require_table()
    fragment = SqlFragment(
        f"DELETE FROM {quote_identifier(table)}"
        + apply_soft_delete_filter(post_sql, descriptor, parser).rstrip(),
        parameters,
    )
    logger.debug("sql.custom_delete_built", table=table, parameter_count=len(fragment.parameters))
    return fragment


def build_custom_soft_delete(
    descriptor: EntityDescriptor,
    post_sql: Optional[str] = None,
    parameters: Sequence[Any] = (),
    clock: Clock = datetime.now,
    parser: Optional[BooleanExpressionParser] = None,
) -> SqlFragment:
    """
    Logically delete every live row matching ``post_sql``.

    Renders ``UPDATE t SET deleted=<deleted_value>[,ts=?] <where>``. The
    update timestamps are bound parameters, ahead of ``parameters``.

    Raises:
        SqlBuildError: If the entity declares no soft-delete column
    """
    table = descriptor.require_table()
    spec = descriptor.require_soft_delete()

    head = SqlFragment(
        f"UPDATE {quote_identifier(table)}"
        f" SET {quote_identifier(spec.column_name)}={spec.deleted_value}"
    )
    fragment = (
        head
        + timestamp_assignments(descriptor, clock)
        + SqlFragment(apply_soft_delete_filter(post_sql, descriptor, parser).rstrip(), parameters)
    )
    logger.debug(
        "sql.custom_soft_delete_built", table=table, parameter_count=len(fragment.parameters)
    )
    return fragment
