"""Shared fixtures: a registry provider, a frozen clock and a textual parser."""

from typing import Any

import pytest

from entity_sql.exceptions import MalformedWhereClauseError
from entity_sql.metadata import RegistryMetadataProvider
from entity_sql.sql import StatementBuilder
from entity_sql.sql.expressions import ParsedWhere
from samples import EVENT, FIXED_NOW, LOG, SCORE, USER, Event, Log, Score, User


class TextExpressionParser:
    """Parser stand-in that merges clauses textually.

    Keeps the caller's text byte-for-byte, which makes builder output easy
    to assert on without depending on sqlglot's formatting.
    """

    def _check(self, text: str) -> str:
        if not text or text.count("(") != text.count(")"):
            raise MalformedWhereClauseError(text, "unbalanced or empty")
        return text

    def parse_where(self, where_sql: str) -> ParsedWhere:
        body = where_sql.strip()[len("where") :].strip()
        return ParsedWhere(statement=where_sql, predicate=self._check(body))

    def parse_condition(self, condition: str) -> Any:
        return self._check(condition.strip())

    def conjoin_grouped(self, condition: Any, predicate: Any) -> Any:
        return f"{condition} AND ({predicate})"

    def render_where(self, clause: ParsedWhere, predicate: Any) -> str:
        return f"WHERE {predicate}"


@pytest.fixture
def text_parser() -> TextExpressionParser:
    return TextExpressionParser()


@pytest.fixture
def provider() -> RegistryMetadataProvider:
    registry = RegistryMetadataProvider()
    registry.register(User, USER)
    registry.register(Score, SCORE)
    registry.register(Log, LOG)
    registry.register(Event, EVENT)
    return registry


@pytest.fixture
def builder(provider, text_parser) -> StatementBuilder:
    return StatementBuilder(provider, parser=text_parser, clock=lambda: FIXED_NOW)
