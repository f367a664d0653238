"""
Merge an AND condition into an existing WHERE clause.

The merge happens on the parsed expression, not on the text: the existing
predicate becomes one parenthesised operand, so a top-level OR in the
caller's clause is never absorbed into the new AND.
"""

import re
from typing import Optional

from entity_sql.config import get_settings
from entity_sql.exceptions import MalformedWhereClauseError
from entity_sql.sql.expressions import BooleanExpressionParser, SqlglotExpressionParser
from entity_sql.utils.logging import get_logger

logger = get_logger(__name__)

WHERE_KEYWORD = re.compile(r"^where\b", re.IGNORECASE)


def default_parser() -> BooleanExpressionParser:
    """A fresh sqlglot parser for the configured dialect."""
    return SqlglotExpressionParser(dialect=get_settings().parser_dialect)


def starts_with_where(sql: str) -> bool:
    return bool(WHERE_KEYWORD.match(sql.strip()))


def merge_where_condition(
    where_sql: Optional[str],
    condition: Optional[str],
    parser: Optional[BooleanExpressionParser] = None,
) -> str:
    """
    Insert ``condition`` into ``where_sql`` as a leading AND operand.

    Args:
        where_sql: Clause starting with WHERE, a non-WHERE tail such as
            ``GROUP BY ...``, or empty/None
        condition: Bare boolean expression without WHERE/AND keywords
        parser: Expression parser; a sqlglot parser is used by default

    Returns:
        Merged clause without a leading space

    Raises:
        MalformedWhereClauseError: If either side fails to parse

    Examples:
        >>> merge_where_condition(None, "x=1")
        'WHERE x=1'
        >>> merge_where_condition("group by name", "deleted=0")
        'WHERE deleted=0 group by name'
        >>> merge_where_condition("where a<>3 or a<>2", "deleted=0")
        'WHERE deleted=0 AND (a<>3 or a<>2)'
    """
    if condition is None or not condition.strip():
        return where_sql or ""
    condition = condition.strip()

    if where_sql is None or not where_sql.strip():
        return f"WHERE {condition}"

    where_sql = where_sql.strip()
    if not starts_with_where(where_sql):
        return f"WHERE {condition} {where_sql}"

    parser = parser or default_parser()
    try:
        clause = parser.parse_where(where_sql)
        merged = parser.conjoin_grouped(parser.parse_condition(condition), clause.predicate)
        return parser.render_where(clause, merged)
    except MalformedWhereClauseError as e:
        logger.error(
            "where_clause.parse_failed",
            where_sql=where_sql,
            condition=condition,
            error=str(e),
        )
        raise
