"""Core SQL utilities package."""

from .fragment import NOTHING_TO_UPDATE, NothingToUpdate, SqlFragment
from .identifier import qualify_column, quote_identifier
from .parameters import (
    bind_key_predicates,
    collect_values,
    key_predicates,
    placeholders,
    render_columns,
    require_non_null_keys,
)

__all__ = [
    "SqlFragment",
    "NothingToUpdate",
    "NOTHING_TO_UPDATE",
    "quote_identifier",
    "qualify_column",
    "render_columns",
    "placeholders",
    "collect_values",
    "key_predicates",
    "require_non_null_keys",
    "bind_key_predicates",
]
