"""
Unit tests for descriptor models and metadata providers.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

import pytest

from entity_sql.exceptions import (
    MissingJoinConditionError,
    MissingKeyColumnError,
    SqlBuildError,
    UnmappedTypeError,
)
from entity_sql.metadata import (
    ColumnDescriptor,
    DeclarativeMetadataProvider,
    EntityDescriptor,
    JoinDescriptor,
    JoinType,
    RegistryMetadataProvider,
    SoftDeleteSpec,
    column,
    join_left,
    join_right,
    join_table,
    table,
)
from samples import EVENT, LOG, SCORE, USER, User


@table("t_account")
@dataclass
class Account:
    id: Optional[int] = column(key=True)
    tenant: Optional[str] = column("tenant_code", key=True)
    nickname: Optional[str] = column()
    is_deleted: Optional[str] = column(soft_delete=("'N'", "'Y'"))
    modified_at: Optional[datetime] = column(update_timestamp=True)
    transient: Optional[str] = None


@table("t_order")
@dataclass
class Order:
    id: Optional[int] = column(key=True)
    account_id: Optional[int] = column()


@join_table(JoinType.RIGHT, on="t1.id = t2.account_id")
@dataclass
class AccountOrder:
    account: Optional[Account] = join_left()
    order: Optional[Order] = join_right()


@join_table(JoinType.LEFT, on="  ")
@dataclass
class BrokenJoin:
    account: Optional[Account] = join_left()
    order: Optional[Order] = join_right()


@dataclass
class Plain:
    id: Optional[int] = None


@pytest.mark.unit
class TestModels:
    """Descriptor construction and derived views."""

    def test_column_attribute_defaults_to_name(self):
        assert ColumnDescriptor("user_name").attribute == "user_name"

    def test_key_and_non_key_views(self):
        assert [c.name for c in USER.key_columns] == ["id"]
        assert [c.name for c in USER.non_key_columns] == [
            "name",
            "age",
            "deleted",
            "update_time",
        ]
        assert [c.name for c in USER.update_timestamp_columns] == ["update_time"]

    def test_columns_become_tuple(self):
        descriptor = EntityDescriptor("t", columns=[ColumnDescriptor("a")])
        assert isinstance(descriptor.columns, tuple)

    def test_require_key_columns(self):
        assert USER.require_single_key_column().name == "id"
        with pytest.raises(MissingKeyColumnError):
            EVENT.require_key_columns()

    def test_single_key_rejects_composite_key(self):
        """A composite key cannot back a one-column IN predicate."""
        composite = EntityDescriptor(
            "t_member",
            columns=[
                ColumnDescriptor("org_id", is_key=True),
                ColumnDescriptor("user_id", is_key=True),
            ],
        )

        assert len(composite.require_key_columns()) == 2
        with pytest.raises(SqlBuildError) as exc_info:
            composite.require_single_key_column()
        assert "t_member" in str(exc_info.value)

    def test_duplicate_columns_rejected(self):
        with pytest.raises(ValueError):
            EntityDescriptor("t", columns=[ColumnDescriptor("a"), ColumnDescriptor("a")])

    def test_single_table_needs_name(self):
        with pytest.raises(ValueError):
            EntityDescriptor(columns=[ColumnDescriptor("a")])

    def test_soft_delete_states_must_differ(self):
        with pytest.raises(ValueError):
            SoftDeleteSpec("deleted", active_value=0, deleted_value="0")

    def test_join_requires_on_condition(self):
        """A blank ON condition fails at construction, before any SQL exists."""
        with pytest.raises(MissingJoinConditionError):
            JoinDescriptor(left=USER, right=SCORE, join_type=JoinType.LEFT, on_condition=" ")

    def test_join_type_keywords(self):
        assert JoinType.INNER.keyword == "JOIN"
        assert JoinType.LEFT.keyword == "LEFT JOIN"
        assert JoinType.RIGHT.keyword == "RIGHT JOIN"

    def test_join_entity_is_read_only(self):
        join = EntityDescriptor(
            join=JoinDescriptor(left=USER, right=SCORE, on_condition="t1.id=t2.user_id")
        )
        assert join.is_join
        with pytest.raises(SqlBuildError):
            join.require_table()

    def test_require_soft_delete(self):
        assert USER.require_soft_delete().column_name == "deleted"
        with pytest.raises(SqlBuildError):
            LOG.require_soft_delete()


@pytest.mark.unit
class TestRegistryMetadataProvider:
    """Explicit registration."""

    def test_describe_and_read(self):
        provider = RegistryMetadataProvider()
        provider.register(User, USER)

        assert provider.describe(User) is USER
        assert provider.read_value(USER.columns[1], User(name="bob")) == "bob"

    def test_unmapped_type(self):
        provider = RegistryMetadataProvider()

        with pytest.raises(UnmappedTypeError) as exc_info:
            provider.describe(User)
        assert "User" in str(exc_info.value)

        with pytest.raises(UnmappedTypeError):
            provider.read_value(USER.columns[0], User())


@pytest.mark.unit
class TestDeclarativeMetadataProvider:
    """Dataclass declarations turned into descriptors."""

    @pytest.fixture
    def provider(self):
        return DeclarativeMetadataProvider()

    def test_table_columns(self, provider):
        descriptor = provider.describe(Account)

        assert descriptor.table_name == "t_account"
        assert [c.name for c in descriptor.columns] == [
            "id",
            "tenant_code",
            "nickname",
            "is_deleted",
            "modified_at",
        ]
        assert [c.name for c in descriptor.key_columns] == ["id", "tenant_code"]
        assert descriptor.columns[1].attribute == "tenant"
        assert [c.name for c in descriptor.update_timestamp_columns] == ["modified_at"]

    def test_soft_delete_column(self, provider):
        assert provider.describe(Account).soft_delete == SoftDeleteSpec(
            "is_deleted", "'N'", "'Y'"
        )

    def test_read_value_uses_attribute(self, provider):
        descriptor = provider.describe(Account)
        account = Account(id=1, tenant="acme")

        assert provider.read_value(descriptor.columns[1], account) == "acme"

    def test_join(self, provider):
        descriptor = provider.describe(AccountOrder)

        assert descriptor.is_join
        assert descriptor.join.join_type is JoinType.RIGHT
        assert descriptor.join.left.table_name == "t_account"
        assert descriptor.join.right.table_name == "t_order"
        assert descriptor.join.on_condition == "t1.id = t2.account_id"

    def test_composite_key_has_no_single_key(self, provider):
        with pytest.raises(SqlBuildError):
            provider.describe(Account).require_single_key_column()

    def test_join_without_condition(self, provider):
        with pytest.raises(MissingJoinConditionError):
            provider.describe(BrokenJoin)

    def test_undecorated_type(self, provider):
        with pytest.raises(UnmappedTypeError):
            provider.describe(Plain)
        with pytest.raises(UnmappedTypeError):
            provider.describe(int)
        with pytest.raises(UnmappedTypeError):
            provider.read_value(ColumnDescriptor("id"), Plain(id=1))
