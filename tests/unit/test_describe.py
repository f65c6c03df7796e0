"""Unit tests for schema_engine.diff.describe."""

from __future__ import annotations

import pytest

from schema_engine.diff import describe_change, describe_property_change, format_value
from schema_engine.models import ChangeAction, ChangeCategory, OnAction, PropertyChange, SchemaChange


def _make_change(
    category: ChangeCategory,
    action: ChangeAction,
    *,
    object_name: str | None = None,
    property_changes: list[PropertyChange] | None = None,
) -> SchemaChange:
    return SchemaChange(
        category=category,
        action=action,
        table_id="t1",
        table_schema="dbo",
        table_name="returns",
        object_id=None if category == ChangeCategory.TABLE else "obj-1",
        object_name=object_name,
        property_changes=property_changes,
    )


class TestFormatValue:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (True, "true"),
            (False, "false"),
            (None, "null"),
            (7, "7"),
            ("nvarchar", "nvarchar"),
            (["a", "b"], "a, b"),
            ([], ""),
            (OnAction.SET_NULL, "2"),
        ],
    )
    def test_rendering(self, value, expected):
        assert format_value(value) == expected

    def test_zero_is_not_false(self):
        assert format_value(0) == "0"


class TestDescribePropertyChange:
    def test_format(self):
        prop = PropertyChange(property="dataType", display_name="Data Type", old_value="int", new_value="bigint")
        assert describe_property_change(prop) == "Data Type changed from 'int' to 'bigint'"


class TestDescribeTable:
    @pytest.mark.parametrize(
        "action, verb",
        [(ChangeAction.ADD, "Created"), (ChangeAction.DELETE, "Deleted")],
    )
    def test_add_delete(self, action, verb):
        assert describe_change(_make_change(ChangeCategory.TABLE, action)) == f"{verb} table [dbo].[returns]"

    def test_modify_lists_properties(self):
        change = _make_change(
            ChangeCategory.TABLE,
            ChangeAction.MODIFY,
            property_changes=[
                PropertyChange(property="name", display_name="Name", old_value="ret", new_value="returns"),
                PropertyChange(property="schema", display_name="Schema", old_value="sales", new_value="dbo"),
            ],
        )
        assert describe_change(change) == (
            "Modified table [dbo].[returns]: Name changed from 'ret' to 'returns', "
            "Schema changed from 'sales' to 'dbo'"
        )

    def test_modify_without_properties(self):
        change = _make_change(ChangeCategory.TABLE, ChangeAction.MODIFY)
        assert describe_change(change) == "Modified table [dbo].[returns]"


class TestDescribeObjects:
    def test_column_add(self):
        change = _make_change(ChangeCategory.COLUMN, ChangeAction.ADD, object_name="reason")
        assert describe_change(change) == "Added column 'reason'"

    def test_column_delete(self):
        change = _make_change(ChangeCategory.COLUMN, ChangeAction.DELETE, object_name="phone_number")
        assert describe_change(change) == "Deleted column 'phone_number'"

    def test_fk_add(self):
        change = _make_change(ChangeCategory.FOREIGN_KEY, ChangeAction.ADD, object_name="FK_returns_order_item_v2")
        assert describe_change(change) == "Added foreign key 'FK_returns_order_item_v2'"

    def test_fk_delete(self):
        change = _make_change(ChangeCategory.FOREIGN_KEY, ChangeAction.DELETE, object_name="FK_returns_order_item")
        assert describe_change(change) == "Deleted foreign key 'FK_returns_order_item'"

    def test_fk_modify_with_lists_and_enums(self):
        change = _make_change(
            ChangeCategory.FOREIGN_KEY,
            ChangeAction.MODIFY,
            object_name="FK_returns_order_item",
            property_changes=[
                PropertyChange(
                    property="columns",
                    display_name="Columns",
                    old_value=["order_item_id"],
                    new_value=["order_item_id", "return_id"],
                ),
                PropertyChange(
                    property="onDeleteAction",
                    display_name="On Delete",
                    old_value=OnAction.NO_ACTION,
                    new_value=OnAction.CASCADE,
                ),
            ],
        )
        assert describe_change(change) == (
            "Modified foreign key 'FK_returns_order_item': "
            "Columns changed from 'order_item_id' to 'order_item_id, return_id', "
            "On Delete changed from '1' to '0'"
        )

    def test_column_modify_nullable(self):
        change = _make_change(
            ChangeCategory.COLUMN,
            ChangeAction.MODIFY,
            object_name="user_id",
            property_changes=[
                PropertyChange(property="isNullable", display_name="Nullable", old_value=False, new_value=True),
            ],
        )
        assert describe_change(change) == "Modified column 'user_id': Nullable changed from 'false' to 'true'"
