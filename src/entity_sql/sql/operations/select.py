"""
SELECT statement builders.

Provides the column projection and FROM/JOIN composition shared by SELECT
and COUNT, plus the LIMIT suffix.
"""

from typing import Any, Optional, Sequence

from entity_sql.exceptions import MissingJoinConditionError
from entity_sql.metadata.models import LEFT_ALIAS, RIGHT_ALIAS, EntityDescriptor
from entity_sql.sql.core.fragment import SqlFragment
from entity_sql.sql.core.identifier import quote_identifier
from entity_sql.sql.core.parameters import render_columns
from entity_sql.sql.expressions import BooleanExpressionParser
from entity_sql.sql.soft_delete import apply_soft_delete_filter
from entity_sql.utils.logging import get_logger

logger = get_logger(__name__)


def _projection(descriptor: EntityDescriptor) -> str:
    join = descriptor.join
    if join is None:
        return render_columns(descriptor.columns)
    return (
        f"{render_columns(join.left.columns, LEFT_ALIAS)},"
        f"{render_columns(join.right.columns, RIGHT_ALIAS)}"
    )


def _from_clause(descriptor: EntityDescriptor) -> str:
    join = descriptor.join
    if join is None:
        return f" FROM {quote_identifier(descriptor.table_name)}"

    on_condition = (join.on_condition or "").strip()
    if not on_condition:
        raise MissingJoinConditionError(join.left.table_name, join.right.table_name)
    return (
        f" FROM {quote_identifier(join.left.table_name)} {LEFT_ALIAS}"
        f" {join.join_type.keyword} {quote_identifier(join.right.table_name)} {RIGHT_ALIAS}"
        f" ON {on_condition}"
    )


def build_select(descriptor: EntityDescriptor) -> SqlFragment:
    """
    Build ``SELECT <columns> FROM <table>`` without any WHERE clause.

    Examples:
        >>> build_select(user).text
        'SELECT `id`,`name`,`deleted` FROM `t_user`'
        >>> build_select(user_with_score).text
        'SELECT t1.`id`,...,t2.`score` FROM `t_user` t1 LEFT JOIN `t_score` t2 ON t1.id=t2.user_id'

    Raises:
        MissingJoinConditionError: If the join has no ON condition
    """
    fragment = SqlFragment(f"SELECT {_projection(descriptor)}{_from_clause(descriptor)}")
    logger.debug("sql.select_built", join=descriptor.is_join, parameter_count=0)
    return fragment


def build_select_count(descriptor: EntityDescriptor) -> SqlFragment:
    """Build ``SELECT count(*) FROM <table>`` with the same FROM/JOIN as SELECT."""
    fragment = SqlFragment(f"SELECT count(*){_from_clause(descriptor)}")
    logger.debug("sql.count_built", join=descriptor.is_join, parameter_count=0)
    return fragment


def build_limit(offset: Optional[int] = None, limit: Optional[int] = None) -> str:
    """
    Build the LIMIT suffix, with a leading space.

    Examples:
        >>> build_limit(None, 10)
        ' limit 10'
        >>> build_limit(5, 10)
        ' limit 5,10'
        >>> build_limit(5, None)
        ''
    """
    if limit is None:
        return ""
    if offset is None:
        return f" limit {int(limit)}"
    return f" limit {int(offset)},{int(limit)}"


def build_query(
    descriptor: EntityDescriptor,
    post_sql: Optional[str] = None,
    parameters: Sequence[Any] = (),
    offset: Optional[int] = None,
    limit: Optional[int] = None,
    parser: Optional[BooleanExpressionParser] = None,
) -> SqlFragment:
    """
    Full SELECT with soft-delete filtering, caller clause and LIMIT.

    Args:
        descriptor: Entity to select
        post_sql: Clause starting with WHERE, or a tail such as ORDER BY
        parameters: Values for the placeholders in ``post_sql``
        offset: Rows to skip, only honoured together with ``limit``
        limit: Maximum rows to return
        parser: Expression parser used to merge the soft-delete condition
    """
    filtered = apply_soft_delete_filter(post_sql, descriptor, parser)
    return build_select(descriptor) + SqlFragment(
        filtered.rstrip() + build_limit(offset, limit), parameters
    )


def build_count_query(
    descriptor: EntityDescriptor,
    post_sql: Optional[str] = None,
    parameters: Sequence[Any] = (),
    parser: Optional[BooleanExpressionParser] = None,
) -> SqlFragment:
    """COUNT counterpart of :func:`build_query`."""
    filtered = apply_soft_delete_filter(post_sql, descriptor, parser)
    return build_select_count(descriptor) + SqlFragment(filtered.rstrip(), parameters)
