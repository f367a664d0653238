"""Entity metadata: descriptor models and the providers that produce them."""

from .declarative import (
    DeclarativeMetadataProvider,
    column,
    join_left,
    join_right,
    join_table,
    table,
)
from .models import (
    LEFT_ALIAS,
    RIGHT_ALIAS,
    ColumnDescriptor,
    EntityDescriptor,
    JoinDescriptor,
    JoinType,
    SoftDeleteSpec,
)
from .provider import MetadataProvider, RegistryMetadataProvider

__all__ = [
    "ColumnDescriptor",
    "EntityDescriptor",
    "JoinDescriptor",
    "JoinType",
    "SoftDeleteSpec",
    "LEFT_ALIAS",
    "RIGHT_ALIAS",
    "MetadataProvider",
    "RegistryMetadataProvider",
    "DeclarativeMetadataProvider",
    "table",
    "join_table",
    "column",
    "join_left",
    "join_right",
]
