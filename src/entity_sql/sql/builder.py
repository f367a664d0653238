"""
High-level statement builder over a metadata provider.

Resolves types and instances to descriptors through the provider, then
delegates to the pure builders in :mod:`entity_sql.sql.operations`.
"""

from datetime import datetime
from typing import Any, Optional, Sequence, Union

from entity_sql.metadata.models import EntityDescriptor
from entity_sql.metadata.provider import MetadataProvider
from entity_sql.sql import operations
from entity_sql.sql.core.fragment import NothingToUpdate, SqlFragment
from entity_sql.sql.expressions import BooleanExpressionParser
from entity_sql.sql.operations.update import Clock
from entity_sql.sql.soft_delete import apply_soft_delete_filter
from entity_sql.sql.where import default_parser, merge_where_condition


class StatementBuilder:
    """
    Build SQL fragments for mapped types.

    Example:
        >>> builder = StatementBuilder(DeclarativeMetadataProvider())
        >>> builder.build_select(User).text
        'SELECT `id`,`name`,`deleted` FROM `t_user`'
        >>> sql, params = builder.build_delete(User(id=7)).bind()
        >>> sql
        'DELETE FROM `t_user` WHERE `deleted`=0 AND (`id`=?)'
    """

    def __init__(
        self,
        provider: MetadataProvider,
        parser: Optional[BooleanExpressionParser] = None,
        clock: Clock = datetime.now,
    ):
        """
        Initialize the StatementBuilder.

        Args:
            provider: Metadata collaborator describing mapped types
            parser: Expression parser for WHERE merging; defaults to sqlglot
                with the configured dialect
            clock: Source of update timestamps
        """
        self.provider = provider
        self.parser = parser or default_parser()
        self.clock = clock

    def describe(self, entity_type: type) -> EntityDescriptor:
        return self.provider.describe(entity_type)

    def _describe_instance(self, instance: Any) -> EntityDescriptor:
        return self.provider.describe(type(instance))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def build_select(self, entity_type: type) -> SqlFragment:
        return operations.build_select(self.describe(entity_type))

    def build_select_count(self, entity_type: type) -> SqlFragment:
        return operations.build_select_count(self.describe(entity_type))

    def build_query(
        self,
        entity_type: type,
        post_sql: Optional[str] = None,
        *parameters: Any,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> SqlFragment:
        """SELECT with soft-delete filter, ``post_sql`` and optional LIMIT."""
        return operations.build_query(
            self.describe(entity_type), post_sql, parameters, offset, limit, self.parser
        )

    def build_count_query(
        self, entity_type: type, post_sql: Optional[str] = None, *parameters: Any
    ) -> SqlFragment:
        return operations.build_count_query(
            self.describe(entity_type), post_sql, parameters, self.parser
        )

    def build_keys_where(self, instance: Any) -> SqlFragment:
        return operations.keys_where(
            self._describe_instance(instance), instance, self.provider.read_value, self.parser
        )

    def build_keys_where_template(self, entity_type: type) -> SqlFragment:
        return operations.keys_where_template(self.describe(entity_type), self.parser)

    def build_key_in_where(self, entity_type: type) -> SqlFragment:
        return operations.key_in_where(self.describe(entity_type), self.parser)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def build_insert(self, instance: Any, include_nulls: bool = False) -> SqlFragment:
        return operations.build_insert(
            self._describe_instance(instance), instance, self.provider.read_value, include_nulls
        )

    def build_insert_batch(self, instances: Sequence[Any]) -> SqlFragment:
        """
        Multi-row INSERT; every instance must be of the same mapped type.

        Raises:
            ValueError: If ``instances`` is empty or mixes types
        """
        if not instances:
            raise ValueError("Batch insert requires at least one instance")
        entity_type = type(instances[0])
        if any(type(i) is not entity_type for i in instances):
            raise ValueError("Batch insert instances must share one type")
        return operations.build_insert_batch(
            self.describe(entity_type), instances, self.provider.read_value
        )

    def build_insert_if_not_exists(
        self,
        instance: Any,
        include_nulls: bool,
        where_sql: str,
        *parameters: Any,
    ) -> SqlFragment:
        return operations.build_insert_if_not_exists(
            self._describe_instance(instance),
            instance,
            self.provider.read_value,
            where_sql,
            include_nulls=include_nulls,
            parameters=parameters,
            parser=self.parser,
        )

    def build_update(
        self,
        instance: Any,
        with_null: bool = False,
        post_sql: Optional[str] = None,
        *parameters: Any,
    ) -> Union[SqlFragment, NothingToUpdate]:
        return operations.build_update(
            self._describe_instance(instance),
            instance,
            self.provider.read_value,
            with_null=with_null,
            post_sql=post_sql,
            parameters=parameters,
            parser=self.parser,
        )

    def build_custom_update(self, instance: Any, set_sql: str, *parameters: Any) -> SqlFragment:
        return operations.build_custom_update(
            self._describe_instance(instance),
            instance,
            self.provider.read_value,
            set_sql,
            parameters=parameters,
            clock=self.clock,
            parser=self.parser,
        )

    def build_soft_delete(self, instance: Any) -> SqlFragment:
        return operations.build_soft_delete(
            self._describe_instance(instance),
            instance,
            self.provider.read_value,
            clock=self.clock,
            parser=self.parser,
        )

    def build_delete(self, instance: Any) -> SqlFragment:
        return operations.build_delete(
            self._describe_instance(instance), instance, self.provider.read_value, self.parser
        )

    def build_custom_delete(
        self, entity_type: type, post_sql: Optional[str] = None, *parameters: Any
    ) -> SqlFragment:
        return operations.build_custom_delete(
            self.describe(entity_type), post_sql, parameters, self.parser
        )

    def build_custom_soft_delete(
        self, entity_type: type, post_sql: Optional[str] = None, *parameters: Any
    ) -> SqlFragment:
        return operations.build_custom_soft_delete(
            self.describe(entity_type), post_sql, parameters, self.clock, self.parser
        )

    # ------------------------------------------------------------------
    # Clause helpers
    # ------------------------------------------------------------------

    def merge_where_condition(self, where_sql: Optional[str], condition: Optional[str]) -> str:
        return merge_where_condition(where_sql, condition, self.parser)

    def apply_soft_delete_filter(self, where_sql: Optional[str], entity_type: type) -> str:
        return apply_soft_delete_filter(where_sql, self.describe(entity_type), self.parser)

    @staticmethod
    def build_limit(offset: Optional[int] = None, limit: Optional[int] = None) -> str:
        return operations.build_limit(offset, limit)
