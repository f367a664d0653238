"""
SQL identifier handling utilities.

Table and column names are always emitted backtick-quoted; this is a fixed
formatting rule rather than a per-call option.
"""

from typing import Optional


def quote_identifier(name: str) -> str:
    """
    Quote a SQL identifier (table or column name) with backticks.

    Args:
        name: The identifier to quote

    Returns:
        Backtick-quoted identifier with internal backticks doubled

    Examples:
        >>> quote_identifier("user_name")
        '`user_name`'
        >>> quote_identifier("odd`name")
        '`odd``name`'
    """
    escaped = name.replace("`", "``")
    return f"`{escaped}`"


def qualify_column(name: str, alias: Optional[str] = None) -> str:
    """
    Quote a column name, optionally prefixed with a table alias.

    Examples:
        >>> qualify_column("id")
        '`id`'
        >>> qualify_column("id", alias="t1")
        't1.`id`'
    """
    quoted = quote_identifier(name)
    if alias:
        return f"{alias}.{quoted}"
    return quoted
