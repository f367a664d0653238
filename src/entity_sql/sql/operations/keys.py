"""
Key-based WHERE clause builders.

Every clause returned here starts with a space and already carries the
soft-delete filter.
"""

from typing import Any, Optional

from entity_sql.metadata.models import EntityDescriptor
from entity_sql.sql.core.fragment import SqlFragment
from entity_sql.sql.core.identifier import quote_identifier
from entity_sql.sql.core.parameters import ValueReader, bind_key_predicates, key_predicates
from entity_sql.sql.expressions import BooleanExpressionParser
from entity_sql.sql.soft_delete import apply_soft_delete_filter


def keys_where(
    descriptor: EntityDescriptor,
    instance: Any,
    read_value: ValueReader,
    parser: Optional[BooleanExpressionParser] = None,
) -> SqlFragment:
    """
    ``WHERE key1=? AND key2=?`` bound to the instance's key values.

    Raises:
        MissingKeyColumnError: If the entity declares no key column
        NullKeyValueError: If any key value is None
    """
    keys = bind_key_predicates(descriptor, instance, read_value)
    where = apply_soft_delete_filter(f"WHERE {keys.text}", descriptor, parser)
    return SqlFragment(where, keys.parameters)


def keys_where_template(
    descriptor: EntityDescriptor, parser: Optional[BooleanExpressionParser] = None
) -> SqlFragment:
    """Key predicates with unbound placeholders, one per key column in order."""
    keys = descriptor.require_key_columns()
    return SqlFragment(
        apply_soft_delete_filter(f"WHERE {key_predicates(keys)}", descriptor, parser)
    )


def key_in_where(
    descriptor: EntityDescriptor, parser: Optional[BooleanExpressionParser] = None
) -> SqlFragment:
    """
    ``WHERE key IN (?)`` on the entity's single key column.

    The single placeholder is meant to be bound to a collection by drivers
    that expand sequences.

    Raises:
        MissingKeyColumnError: If the entity declares no key column
        SqlBuildError: If the key is composite
    """
    key = descriptor.require_single_key_column()
    return SqlFragment(
        apply_soft_delete_filter(
            f"WHERE {quote_identifier(key.name)} IN (?)", descriptor, parser
        )
    )
