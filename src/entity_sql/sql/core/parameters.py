"""
SQL parameter binding utilities.

Render column lists and ``?`` placeholders, and collect instance values in
the same order the placeholders appear.
"""

from typing import Any, Callable, List, Optional, Sequence, Tuple

from entity_sql.exceptions import NullKeyValueError
from entity_sql.metadata.models import ColumnDescriptor, EntityDescriptor
from entity_sql.sql.core.fragment import PLACEHOLDER, SqlFragment
from entity_sql.sql.core.identifier import qualify_column

ValueReader = Callable[[ColumnDescriptor, Any], Any]


def render_columns(columns: Sequence[ColumnDescriptor], alias: Optional[str] = None) -> str:
    """
    Render a comma-separated, quoted column list.

    Examples:
        >>> render_columns([ColumnDescriptor("id"), ColumnDescriptor("name")])
        '`id`,`name`'
        >>> render_columns([ColumnDescriptor("id")], alias="t1")
        't1.`id`'
    """
    return ",".join(qualify_column(c.name, alias) for c in columns)


def placeholders(count: int) -> str:
    """
    Build ``count`` comma-separated placeholders.

    Examples:
        >>> placeholders(3)
        '?,?,?'
        >>> placeholders(0)
        ''
    """
    return ",".join([PLACEHOLDER] * count)


def collect_values(
    columns: Sequence[ColumnDescriptor],
    instance: Any,
    read_value: ValueReader,
    include_nulls: bool,
) -> Tuple[List[ColumnDescriptor], List[Any]]:
    """
    Read column values from an instance.

    Args:
        columns: Candidate columns in declaration order
        instance: Mapped object to read from
        read_value: Provider callable returning a column's value
        include_nulls: Keep columns whose value is None

    Returns:
        Tuple of (surviving columns, their values), index-aligned
    """
    kept: List[ColumnDescriptor] = []
    values: List[Any] = []
    for column in columns:
        value = read_value(column, instance)
        if value is None and not include_nulls:
            continue
        kept.append(column)
        values.append(value)
    return kept, values


def key_predicates(columns: Sequence[ColumnDescriptor]) -> str:
    """
    Build ``col=?`` predicates joined with AND, without the WHERE keyword.

    Examples:
        >>> key_predicates([ColumnDescriptor("id"), ColumnDescriptor("tenant")])
        '`id`=? AND `tenant`=?'
    """
    return " AND ".join(f"{qualify_column(c.name)}={PLACEHOLDER}" for c in columns)


def require_non_null_keys(
    columns: Sequence[ColumnDescriptor],
    values: Sequence[Any],
    table: Optional[str] = None,
) -> None:
    """Raise :class:`NullKeyValueError` for the first key whose value is None."""
    for column, value in zip(columns, values):
        if value is None:
            raise NullKeyValueError(column.name, table=table)


def bind_key_predicates(
    descriptor: EntityDescriptor, instance: Any, read_value: ValueReader
) -> SqlFragment:
    """
    Key predicates for one instance, with their values bound.

    Raises:
        MissingKeyColumnError: If the entity declares no key column
        NullKeyValueError: If any key value is None
    """
    keys = descriptor.require_key_columns()
    _, values = collect_values(keys, instance, read_value, include_nulls=True)
    require_non_null_keys(keys, values, table=descriptor.table_name)
    return SqlFragment(key_predicates(keys), values)
