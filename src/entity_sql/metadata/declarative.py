"""
Declarative mapping for dataclasses.

Mapped types declare their table with a class decorator and their columns
with dataclass field helpers; the provider turns those declarations into
:class:`EntityDescriptor` values.

Example:
    >>> @table("t_user")
    ... @dataclass
    ... class User:
    ...     id: Optional[int] = column(key=True)
    ...     name: Optional[str] = column()
    ...     deleted: Optional[int] = column(soft_delete=(0, 1))
    ...     update_time: Optional[datetime] = column(update_timestamp=True)
    ...
    >>> @join_table(JoinType.LEFT, on="t1.id = t2.user_id")
    ... @dataclass
    ... class UserWithScore:
    ...     user: Optional[User] = join_left()
    ...     score: Optional[Score] = join_right()
"""

import dataclasses
import typing
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple, TypeVar

from entity_sql.exceptions import UnmappedTypeError
from entity_sql.metadata.models import (
    ColumnDescriptor,
    EntityDescriptor,
    JoinDescriptor,
    JoinType,
    SoftDeleteSpec,
    SqlLiteral,
)

T = TypeVar("T")

METADATA_KEY = "entity_sql"
TABLE_ATTR = "__entity_sql_table__"
JOIN_ATTR = "__entity_sql_join__"

_LEFT = "join_left"
_RIGHT = "join_right"


@dataclass(frozen=True)
class ColumnOptions:
    """Per-field options recorded by :func:`column`."""

    name: Optional[str] = None
    key: bool = False
    update_timestamp: bool = False
    soft_delete: Optional[Tuple[SqlLiteral, SqlLiteral]] = None


def table(name: str) -> Callable[[type], type]:
    """Map a dataclass onto a single table."""

    def decorate(cls: type) -> type:
        setattr(cls, TABLE_ATTR, name)
        return cls

    return decorate


def join_table(join_type: JoinType = JoinType.INNER, on: str = "") -> Callable[[type], type]:
    """Map a dataclass onto a read-only join of its two marked fields."""

    def decorate(cls: type) -> type:
        setattr(cls, JOIN_ATTR, (JoinType(join_type), on))
        return cls

    return decorate


def column(
    name: Optional[str] = None,
    *,
    key: bool = False,
    update_timestamp: bool = False,
    soft_delete: Optional[Tuple[SqlLiteral, SqlLiteral]] = None,
    default: Any = None,
) -> Any:
    """
    Declare a mapped column on a dataclass field.

    Args:
        name: Column name; defaults to the field name
        key: Field is part of the row identity
        update_timestamp: Stamp with the current time on custom updates
        soft_delete: ``(active_value, deleted_value)`` marks the soft-delete column
        default: Field default
    """
    options = ColumnOptions(
        name=name, key=key, update_timestamp=update_timestamp, soft_delete=soft_delete
    )
    return dataclasses.field(default=default, metadata={METADATA_KEY: options})


def join_left() -> Any:
    return dataclasses.field(default=None, metadata={METADATA_KEY: _LEFT})


def join_right() -> Any:
    return dataclasses.field(default=None, metadata={METADATA_KEY: _RIGHT})


def _unwrap_optional(hint: Any) -> Any:
    args = [a for a in typing.get_args(hint) if a is not type(None)]
    if len(args) == 1:
        return args[0]
    return hint


class DeclarativeMetadataProvider:
    """Provider reading :func:`table` / :func:`join_table` declarations."""

    def describe(self, entity_type: type) -> EntityDescriptor:
        if not dataclasses.is_dataclass(entity_type):
            raise UnmappedTypeError(entity_type)
        if hasattr(entity_type, JOIN_ATTR):
            return self._describe_join(entity_type)
        if hasattr(entity_type, TABLE_ATTR):
            return self._describe_table(entity_type)
        raise UnmappedTypeError(entity_type)

    def read_value(self, column: ColumnDescriptor, instance: Any) -> Any:
        entity_type = type(instance)
        if not (hasattr(entity_type, TABLE_ATTR) or hasattr(entity_type, JOIN_ATTR)):
            raise UnmappedTypeError(entity_type)
        return getattr(instance, column.attribute)

    def _describe_table(self, entity_type: type) -> EntityDescriptor:
        columns = []
        soft_delete = None
        for f in dataclasses.fields(entity_type):
            options = f.metadata.get(METADATA_KEY)
            if not isinstance(options, ColumnOptions):
                continue
            column_name = options.name or f.name
            columns.append(
                ColumnDescriptor(
                    name=column_name,
                    attribute=f.name,
                    is_key=options.key,
                    is_update_timestamp=options.update_timestamp,
                )
            )
            if options.soft_delete is not None and soft_delete is None:
                active, deleted = options.soft_delete
                soft_delete = SoftDeleteSpec(column_name, active, deleted)

        return EntityDescriptor(
            table_name=getattr(entity_type, TABLE_ATTR),
            columns=tuple(columns),
            soft_delete=soft_delete,
        )

    def _describe_join(self, entity_type: type) -> EntityDescriptor:
        join_type, on_condition = getattr(entity_type, JOIN_ATTR)
        hints = typing.get_type_hints(entity_type)
        sides = {}
        for f in dataclasses.fields(entity_type):
            marker = f.metadata.get(METADATA_KEY)
            if marker in (_LEFT, _RIGHT):
                sides[marker] = self.describe(_unwrap_optional(hints[f.name]))

        if _LEFT not in sides or _RIGHT not in sides:
            raise UnmappedTypeError(entity_type)

        join = JoinDescriptor(
            left=sides[_LEFT],
            right=sides[_RIGHT],
            join_type=join_type,
            on_condition=on_condition,
        )
        return EntityDescriptor(join=join)
