"""
SQL module for statement synthesis from entity metadata.

This module provides builders for SELECT/COUNT/INSERT/UPDATE/DELETE text
with ordered bound values, backtick identifier quoting, and expression-level
merging of soft-delete conditions into WHERE clauses.
"""

from .builder import StatementBuilder
from .core.fragment import NOTHING_TO_UPDATE, NothingToUpdate, SqlFragment
from .core.identifier import quote_identifier
from .expressions import BooleanExpressionParser, SqlglotExpressionParser
from .operations import build_limit
from .soft_delete import apply_soft_delete_filter, soft_delete_condition
from .where import merge_where_condition

__all__ = [
    "StatementBuilder",
    "SqlFragment",
    "NothingToUpdate",
    "NOTHING_TO_UPDATE",
    "quote_identifier",
    "BooleanExpressionParser",
    "SqlglotExpressionParser",
    "merge_where_condition",
    "apply_soft_delete_filter",
    "soft_delete_condition",
    "build_limit",
]
