"""Pluggable boolean-expression parsing used to merge WHERE conditions."""

from .base import BooleanExpressionParser, ParsedWhere
from .sqlglot_parser import SourceExpression, SqlglotExpressionParser

__all__ = [
    "BooleanExpressionParser",
    "ParsedWhere",
    "SourceExpression",
    "SqlglotExpressionParser",
]
