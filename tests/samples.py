"""Sample mapped types and descriptors shared by the unit tests."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from entity_sql.metadata import (
    ColumnDescriptor,
    EntityDescriptor,
    JoinDescriptor,
    JoinType,
    SoftDeleteSpec,
)

FIXED_NOW = datetime(2026, 1, 2, 3, 4, 5)


@dataclass
class User:
    id: Optional[int] = None
    name: Optional[str] = None
    age: Optional[int] = None
    deleted: Optional[int] = None
    update_time: Optional[datetime] = None


@dataclass
class Score:
    id: Optional[int] = None
    user_id: Optional[int] = None
    score: Optional[int] = None


@dataclass
class Log:
    id: Optional[int] = None
    message: Optional[str] = None


@dataclass
class Event:
    message: Optional[str] = None


USER = EntityDescriptor(
    table_name="t_user",
    columns=(
        ColumnDescriptor("id", is_key=True),
        ColumnDescriptor("name"),
        ColumnDescriptor("age"),
        ColumnDescriptor("deleted"),
        ColumnDescriptor("update_time", is_update_timestamp=True),
    ),
    soft_delete=SoftDeleteSpec("deleted", active_value=0, deleted_value=1),
)

SCORE = EntityDescriptor(
    table_name="t_score",
    columns=(
        ColumnDescriptor("id", is_key=True),
        ColumnDescriptor("user_id"),
        ColumnDescriptor("score"),
    ),
)

SOFT_SCORE = EntityDescriptor(
    table_name="t_score",
    columns=SCORE.columns + (ColumnDescriptor("removed"),),
    soft_delete=SoftDeleteSpec("removed"),
)

LOG = EntityDescriptor(
    table_name="t_log",
    columns=(ColumnDescriptor("id", is_key=True), ColumnDescriptor("message")),
)

EVENT = EntityDescriptor(table_name="t_event", columns=(ColumnDescriptor("message"),))


def make_join(
    join_type: JoinType,
    left: EntityDescriptor = USER,
    right: EntityDescriptor = SCORE,
) -> EntityDescriptor:
    return EntityDescriptor(
        join=JoinDescriptor(
            left=left, right=right, join_type=join_type, on_condition="t1.id=t2.user_id"
        )
    )


