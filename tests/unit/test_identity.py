"""Unit tests for schema_engine.diff.identity."""

from __future__ import annotations

from schema_engine.diff.identity import (
    COLUMN_PROPERTIES,
    FOREIGN_KEY_PROPERTIES,
    TABLE_PROPERTIES,
    diff_properties,
    find_by_id,
    find_table_by_name,
    index_of_id,
    map_by_id,
    values_equal,
)
from schema_engine.models import Column, ForeignKey, OnAction, Table

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _col(col_id: str, name: str, **kwargs) -> Column:
    return Column(id=col_id, name=name, **kwargs)


def _fk(**kwargs) -> ForeignKey:
    defaults = {
        "id": "fk-1",
        "name": "FK_a_b",
        "columns": ["b_id"],
        "referenced_schema_name": "dbo",
        "referenced_table_name": "b",
        "referenced_columns": ["id"],
    }
    defaults.update(kwargs)
    return ForeignKey(**defaults)


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------


class TestLookup:
    def test_map_by_id_preserves_order(self):
        cols = [_col("c2", "b"), _col("c1", "a"), _col("c3", "c")]
        assert list(map_by_id(cols)) == ["c2", "c1", "c3"]

    def test_find_by_id(self):
        cols = [_col("c1", "a"), _col("c2", "b")]
        assert find_by_id(cols, "c2").name == "b"
        assert find_by_id(cols, "missing") is None
        assert find_by_id(cols, None) is None

    def test_index_of_id(self):
        cols = [_col("c1", "a"), _col("c2", "b")]
        assert index_of_id(cols, "c1") == 0
        assert index_of_id(cols, "c2") == 1
        assert index_of_id(cols, "c9") == -1

    def test_find_table_by_name_requires_schema_and_name(self):
        tables = [
            Table(id="t1", schema="dbo", name="users"),
            Table(id="t2", schema="audit", name="users"),
        ]
        assert find_table_by_name(tables, "audit", "users").id == "t2"
        assert find_table_by_name(tables, "dbo", "users").id == "t1"
        assert find_table_by_name(tables, "sales", "users") is None

    def test_find_table_by_name_is_case_sensitive(self):
        tables = [Table(id="t1", schema="dbo", name="users")]
        assert find_table_by_name(tables, "dbo", "Users") is None


# ---------------------------------------------------------------------------
# values_equal
# ---------------------------------------------------------------------------


class TestValuesEqual:
    def test_scalars(self):
        assert values_equal(1, 1)
        assert values_equal("a", "a")
        assert values_equal(None, None)
        assert not values_equal("a", "b")
        assert not values_equal(None, "")

    def test_lists_are_order_sensitive(self):
        assert values_equal(["a", "b"], ["a", "b"])
        assert not values_equal(["a", "b"], ["b", "a"])

    def test_length_difference(self):
        assert not values_equal(["a"], ["a", "b"])
        assert not values_equal([], ["a"])

    def test_nested(self):
        assert values_equal([["a", 1], {"k": [1, 2]}], [["a", 1], {"k": [1, 2]}])
        assert not values_equal([{"k": [1, 2]}], [{"k": [2, 1]}])

    def test_list_vs_scalar(self):
        assert not values_equal(["a"], "a")
        assert not values_equal(None, [])

    def test_enum_equals_raw_value(self):
        assert values_equal(OnAction.CASCADE, 0)


# ---------------------------------------------------------------------------
# diff_properties
# ---------------------------------------------------------------------------


class TestDiffProperties:
    def test_no_changes(self):
        col = _col("c1", "a", data_type="int")
        assert diff_properties(col, col.model_copy(), COLUMN_PROPERTIES) == []

    def test_declared_order(self):
        old = _col("c1", "user_id", data_type="int", is_nullable=False)
        new = _col("c1", "user_id", data_type="bigint", is_nullable=True)
        changes = diff_properties(old, new, COLUMN_PROPERTIES)
        assert [c.property for c in changes] == ["dataType", "isNullable"]
        assert changes[0].display_name == "Data Type"
        assert changes[0].old_value == "int"
        assert changes[0].new_value == "bigint"
        assert changes[1].old_value is False
        assert changes[1].new_value is True

    def test_table_schema_uses_wire_key(self):
        old = Table(id="t1", schema="dbo", name="users")
        new = Table(id="t1", schema="app", name="users")
        changes = diff_properties(old, new, TABLE_PROPERTIES)
        assert len(changes) == 1
        assert changes[0].property == "schema"
        assert changes[0].display_name == "Schema"

    def test_fk_column_list_change(self):
        old = _fk()
        new = _fk(columns=["b_id", "c_id"], referenced_columns=["id", "c"])
        changes = diff_properties(old, new, FOREIGN_KEY_PROPERTIES)
        assert [c.property for c in changes] == ["columns", "referencedColumns"]
        assert changes[0].old_value == ["b_id"]
        assert changes[0].new_value == ["b_id", "c_id"]

    def test_fk_reordered_columns_is_a_change(self):
        old = _fk(columns=["a", "b"])
        new = _fk(columns=["b", "a"])
        changes = diff_properties(old, new, FOREIGN_KEY_PROPERTIES)
        assert [c.property for c in changes] == ["columns"]

    def test_values_are_copied(self):
        old = _fk(columns=["a"])
        new = _fk(columns=["a", "b"])
        change = diff_properties(old, new, FOREIGN_KEY_PROPERTIES)[0]
        new.columns.append("c")
        assert change.new_value == ["a", "b"]

    def test_column_property_table_covers_all_scalars(self):
        attributes = {p.attribute for p in COLUMN_PROPERTIES}
        assert attributes == set(Column.model_fields) - {"id"}
