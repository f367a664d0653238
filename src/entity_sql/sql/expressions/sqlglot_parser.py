"""
sqlglot-backed boolean-expression parser.

A WHERE clause is validated by hosting it behind a throwaway SELECT, so that
trailing clauses such as ORDER BY, LIMIT or LOCK IN SHARE MODE are
understood. Rendering never re-serializes the caller's text: the predicate
and everything after it are copied from the input byte-for-byte, using
token offsets to find where the predicate ends. Every call goes through
``sqlglot.parse_one``, which builds its own parser, so instances hold no
parse state and may be shared.
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

import sqlglot
from sqlglot import expressions as exp
from sqlglot.errors import SqlglotError
from sqlglot.tokens import TokenType

from entity_sql.exceptions import MalformedWhereClauseError
from entity_sql.sql.expressions.base import ParsedWhere

HOST_SELECT = "SELECT * FROM _where_host"


@dataclass(frozen=True)
class SourceExpression:
    """
    A parsed expression together with the source text it was read from.

    Attributes:
        node: sqlglot AST of the expression
        text: Caller text for the expression, emitted unchanged on render
    """

    node: exp.Expression
    text: str


class SqlglotExpressionParser:
    """
    Parse boolean expressions with sqlglot, render them from source text.

    Example:
        >>> parser = SqlglotExpressionParser()
        >>> clause = parser.parse_where("where a<>3 or a<>2 limit ?, ?")
        >>> merged = parser.conjoin_grouped(parser.parse_condition("deleted=0"), clause.predicate)
        >>> parser.render_where(clause, merged)
        'WHERE deleted=0 AND (a<>3 or a<>2) limit ?, ?'
    """

    def __init__(self, dialect: Optional[str] = "mysql"):
        self.dialect = dialect

    def parse_where(self, where_sql: str) -> ParsedWhere:
        text = where_sql.strip()
        statement = self._parse(f"{HOST_SELECT} {text}", where_sql)
        predicate = self._where_predicate(statement)
        if predicate is None:
            raise MalformedWhereClauseError(where_sql, "no WHERE predicate found")

        start, end = self._predicate_span(text, predicate)
        return ParsedWhere(
            statement=statement,
            predicate=SourceExpression(predicate, text[start:end].strip()),
            trailing=text[end:],
        )

    def parse_condition(self, condition: str) -> SourceExpression:
        text = condition.strip()
        node = self._parse(text, condition)
        if not isinstance(node, exp.Condition):
            raise MalformedWhereClauseError(condition, "not a boolean expression")
        return SourceExpression(node, text)

    def conjoin_grouped(
        self, condition: SourceExpression, predicate: SourceExpression
    ) -> SourceExpression:
        node = exp.And(
            this=condition.node.copy(), expression=exp.Paren(this=predicate.node.copy())
        )
        return SourceExpression(node, f"{condition.text} AND ({predicate.text})")

    def render_where(self, clause: ParsedWhere, predicate: SourceExpression) -> str:
        return f"WHERE {predicate.text}{clause.trailing}"

    def _predicate_span(self, text: str, predicate: exp.Expression) -> Tuple[int, int]:
        """
        Character range of the predicate inside ``text``.

        The predicate ends at the shortest run of top-level tokens after
        WHERE that parses to the same tree as the full clause's predicate.
        """
        try:
            tokens = sqlglot.tokenize(text, read=self.dialect)
        except SqlglotError as e:
            raise MalformedWhereClauseError(text, str(e).splitlines()[0]) from e
        if len(tokens) < 2 or tokens[0].token_type != TokenType.WHERE:
            raise MalformedWhereClauseError(text, "no WHERE predicate found")

        start = tokens[0].end + 1
        depth = 0
        for token in tokens[1:]:
            if token.token_type == TokenType.L_PAREN:
                depth += 1
            elif token.token_type == TokenType.R_PAREN:
                depth -= 1
            if depth:
                continue
            end = token.end + 1
            if self._parses_to(text[start:end], predicate):
                return start, end

        raise MalformedWhereClauseError(text, "cannot locate the WHERE predicate")

    def _parses_to(self, candidate: str, predicate: exp.Expression) -> bool:
        try:
            statement = sqlglot.parse_one(f"{HOST_SELECT} WHERE {candidate}", read=self.dialect)
        except SqlglotError:
            return False
        return self._where_predicate(statement) == predicate

    @staticmethod
    def _where_predicate(statement: Any) -> Optional[exp.Expression]:
        if not isinstance(statement, exp.Select):
            return None
        where = statement.args.get("where")
        return where.this if where is not None else None

    def _parse(self, sql: str, source_text: str) -> Any:
        try:
            node = sqlglot.parse_one(sql, read=self.dialect)
        except SqlglotError as e:
            raise MalformedWhereClauseError(source_text, str(e).splitlines()[0]) from e
        if node is None:
            raise MalformedWhereClauseError(source_text, "empty expression")
        return node
