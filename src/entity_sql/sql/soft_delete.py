"""
Soft-delete filtering policy.

Rows are logically deleted by flipping a marker column, so every statement
that reads or writes existing rows must also require the marker's active
state. For outer joins the optional side may be absent entirely; its marker
is then NULL and the filter has to accept that.
"""

from typing import List, Optional

from entity_sql.metadata.models import (
    LEFT_ALIAS,
    RIGHT_ALIAS,
    EntityDescriptor,
    JoinType,
    SoftDeleteSpec,
)
from entity_sql.sql.core.identifier import qualify_column
from entity_sql.sql.expressions import BooleanExpressionParser
from entity_sql.sql.where import merge_where_condition


def _active_condition(
    spec: SoftDeleteSpec, alias: Optional[str] = None, nullable: bool = False
) -> str:
    column = qualify_column(spec.column_name, alias)
    condition = f"{column}={spec.active_value}"
    if nullable:
        return f"({condition} OR {column} IS NULL)"
    return condition


def soft_delete_condition(descriptor: EntityDescriptor) -> Optional[str]:
    """
    Condition selecting only live rows, or None when nothing is soft-deleted.

    Examples:
        >>> soft_delete_condition(EntityDescriptor("t_user", soft_delete=SoftDeleteSpec("deleted")))
        '`deleted`=0'
    """
    join = descriptor.join
    if join is None:
        if descriptor.soft_delete is None:
            return None
        return _active_condition(descriptor.soft_delete)

    parts: List[str] = []
    if join.left.soft_delete is not None:
        parts.append(
            _active_condition(
                join.left.soft_delete, LEFT_ALIAS, nullable=join.join_type is JoinType.RIGHT
            )
        )
    if join.right.soft_delete is not None:
        parts.append(
            _active_condition(
                join.right.soft_delete, RIGHT_ALIAS, nullable=join.join_type is JoinType.LEFT
            )
        )
    if not parts:
        return None
    return " AND ".join(parts)


def apply_soft_delete_filter(
    where_sql: Optional[str],
    descriptor: EntityDescriptor,
    parser: Optional[BooleanExpressionParser] = None,
) -> str:
    """
    Merge the soft-delete condition into ``where_sql``.

    The result always starts with exactly one space so it can be appended
    directly after a table name.

    Raises:
        MalformedWhereClauseError: If ``where_sql`` fails to parse
    """
    where_sql = (where_sql or "").lstrip()
    condition = soft_delete_condition(descriptor)
    if condition is None:
        return f" {where_sql}"
    return " " + merge_where_condition(where_sql, condition, parser)
