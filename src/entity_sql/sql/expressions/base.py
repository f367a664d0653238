"""
Boolean-expression parser capability consumed by the where-clause composer.

The composer only needs to parse a clause and a condition, build one AND
node, and render the result, so any parser that offers those four steps can
be plugged in.
"""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class ParsedWhere:
    """
    A parsed ``WHERE ...`` clause.

    Attributes:
        statement: Parser-specific handle for the whole clause
        predicate: Parsed boolean expression following ``WHERE``
        trailing: Caller text after the predicate (GROUP BY, ORDER BY, LIMIT,
            locking clauses), kept verbatim with its leading whitespace
    """

    statement: Any
    predicate: Any
    trailing: str = ""


class BooleanExpressionParser(Protocol):
    """Protocol for boolean-expression parsers."""

    def parse_where(self, where_sql: str) -> ParsedWhere:
        """Parse text starting with ``WHERE``; raise MalformedWhereClauseError."""
        ...

    def parse_condition(self, condition: str) -> Any:
        """Parse a bare boolean expression; raise MalformedWhereClauseError."""
        ...

    def conjoin_grouped(self, condition: Any, predicate: Any) -> Any:
        """``condition AND (predicate)`` with the predicate kept as one group."""
        ...

    def render_where(self, clause: ParsedWhere, predicate: Any) -> str:
        """Render ``WHERE <predicate>`` followed by the clause's trailing text."""
        ...
