"""
Metadata provider contract and the explicit-registration implementation.

Builders never introspect domain objects themselves; they ask a provider to
describe a type and to read a column's value from an instance.
"""

from typing import Any, Dict, Protocol, runtime_checkable

from entity_sql.exceptions import UnmappedTypeError
from entity_sql.metadata.models import ColumnDescriptor, EntityDescriptor


@runtime_checkable
class MetadataProvider(Protocol):
    """Protocol for entity metadata collaborators."""

    def describe(self, entity_type: type) -> EntityDescriptor: ...

    def read_value(self, column: ColumnDescriptor, instance: Any) -> Any: ...


class RegistryMetadataProvider:
    """
    Provider backed by an explicit type -> descriptor registry.

    Example:
        >>> provider = RegistryMetadataProvider()
        >>> provider.register(User, EntityDescriptor("t_user", columns=[...]))
        >>> provider.describe(User).table_name
        't_user'
    """

    def __init__(self) -> None:
        self._descriptors: Dict[type, EntityDescriptor] = {}

    def register(self, entity_type: type, descriptor: EntityDescriptor) -> None:
        self._descriptors[entity_type] = descriptor

    def describe(self, entity_type: type) -> EntityDescriptor:
        try:
            return self._descriptors[entity_type]
        except KeyError:
            raise UnmappedTypeError(entity_type) from None

    def read_value(self, column: ColumnDescriptor, instance: Any) -> Any:
        if type(instance) not in self._descriptors:
            raise UnmappedTypeError(type(instance))
        return getattr(instance, column.attribute)
