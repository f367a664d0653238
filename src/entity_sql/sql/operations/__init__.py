"""Statement builders over entity descriptors."""

from .delete import build_custom_delete, build_custom_soft_delete, build_delete
from .insert import build_insert, build_insert_batch, build_insert_if_not_exists
from .keys import key_in_where, keys_where, keys_where_template
from .select import build_count_query, build_limit, build_query, build_select, build_select_count
from .update import build_custom_update, build_soft_delete, build_update

__all__ = [
    "build_select",
    "build_select_count",
    "build_query",
    "build_count_query",
    "build_limit",
    "keys_where",
    "keys_where_template",
    "key_in_where",
    "build_insert",
    "build_insert_batch",
    "build_insert_if_not_exists",
    "build_update",
    "build_custom_update",
    "build_soft_delete",
    "build_delete",
    "build_custom_delete",
    "build_custom_soft_delete",
]
