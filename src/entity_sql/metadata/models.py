"""
Immutable metadata describing how a mapped type lands on one or two tables.

Descriptors are built once per mapping and shared across calls; nothing in
this package mutates them after construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union

from entity_sql.exceptions import (
    MissingJoinConditionError,
    MissingKeyColumnError,
    SqlBuildError,
)

# SQL literal for a soft-delete state; strings are embedded verbatim, e.g. "'N'"
SqlLiteral = Union[int, str]

LEFT_ALIAS = "t1"
RIGHT_ALIAS = "t2"


class JoinType(str, Enum):
    """Supported two-table join kinds, valued by their SQL keyword."""

    INNER = "JOIN"
    LEFT = "LEFT JOIN"
    RIGHT = "RIGHT JOIN"

    @property
    def keyword(self) -> str:
        return self.value


@dataclass(frozen=True)
class SoftDeleteSpec:
    """
    Logical-deletion marker column with its two literal states.

    Attributes:
        column_name: Marker column name
        active_value: Literal stored while the row is live
        deleted_value: Literal stored once the row is logically deleted
    """

    column_name: str
    active_value: SqlLiteral = 0
    deleted_value: SqlLiteral = 1

    def __post_init__(self) -> None:
        if not self.column_name:
            raise ValueError("Soft delete column name must not be empty")
        if str(self.active_value) == str(self.deleted_value):
            raise ValueError(
                f"Soft delete states must differ, got {self.active_value!r} twice"
            )


@dataclass(frozen=True)
class ColumnDescriptor:
    """
    One mapped column.

    Attributes:
        name: Column name in the table
        attribute: Attribute holding the value on instances (defaults to name)
        is_key: Part of the row identity
        is_update_timestamp: Stamped with the current time by custom updates
    """

    name: str
    attribute: str = ""
    is_key: bool = False
    is_update_timestamp: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Column name must not be empty")
        if not self.attribute:
            object.__setattr__(self, "attribute", self.name)


@dataclass(frozen=True)
class JoinDescriptor:
    """Two entities joined as ``left t1 <join> right t2 ON <on_condition>``."""

    left: EntityDescriptor
    right: EntityDescriptor
    join_type: JoinType = JoinType.INNER
    on_condition: str = ""

    def __post_init__(self) -> None:
        if not self.on_condition or not self.on_condition.strip():
            raise MissingJoinConditionError(self.left.table_name, self.right.table_name)
        if self.left.is_join or self.right.is_join:
            raise ValueError("Join sides must be single-table entities")
        object.__setattr__(self, "join_type", JoinType(self.join_type))


@dataclass(frozen=True)
class EntityDescriptor:
    """
    Static metadata for one mapped type.

    A descriptor either maps a single table (``table_name`` + ``columns``) or
    a read-only join of two single-table descriptors (``join``).
    """

    table_name: str = ""
    columns: Tuple[ColumnDescriptor, ...] = field(default_factory=tuple)
    soft_delete: Optional[SoftDeleteSpec] = None
    join: Optional[JoinDescriptor] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "columns", tuple(self.columns))
        if self.join is None and not self.table_name:
            raise ValueError("Single-table entity requires a table name")
        names = [c.name for c in self.columns]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate column names in {self.table_name}: {names}")

    @property
    def is_join(self) -> bool:
        return self.join is not None

    @property
    def key_columns(self) -> Tuple[ColumnDescriptor, ...]:
        return tuple(c for c in self.columns if c.is_key)

    @property
    def non_key_columns(self) -> Tuple[ColumnDescriptor, ...]:
        return tuple(c for c in self.columns if not c.is_key)

    @property
    def update_timestamp_columns(self) -> Tuple[ColumnDescriptor, ...]:
        return tuple(c for c in self.columns if c.is_update_timestamp)

    def require_key_columns(self) -> Tuple[ColumnDescriptor, ...]:
        """Key columns in declaration order; raises if there are none."""
        keys = self.key_columns
        if not keys:
            raise MissingKeyColumnError(self.table_name)
        return keys

    def require_single_key_column(self) -> ColumnDescriptor:
        """
        The only key column, used by ``key IN (?)`` predicates.

        Raises:
            MissingKeyColumnError: If the entity declares no key column
            SqlBuildError: If the key is composite
        """
        keys = self.require_key_columns()
        if len(keys) > 1:
            raise SqlBuildError(
                f"Key IN predicate needs a single key column, found {len(keys)}",
                table=self.table_name,
            )
        return keys[0]

    def require_table(self) -> str:
        """Table name for write statements; join entities are read-only."""
        if self.join is not None:
            raise SqlBuildError(
                "Join entities only support SELECT and COUNT",
                table=self.join.left.table_name,
            )
        return self.table_name

    def require_soft_delete(self) -> SoftDeleteSpec:
        if self.soft_delete is None:
            raise SqlBuildError("Entity declares no soft delete column", table=self.table_name)
        return self.soft_delete
