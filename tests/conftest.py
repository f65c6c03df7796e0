"""Shared fixtures for schema engine tests.

Provides the reference snapshots used across the diff, describe, revert,
and annotation suites.  Every fixture returns a fresh object so tests may
edit their copy freely.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from schema_engine.models import RevertMessages, Schema
from schema_engine.serialization import load_schema_file

FIXTURES_DIR = Path(__file__).parent / "fixtures"

USERS_ID = "fae49816-b614-4a62-8787-4b497782b4fa"
USER_ID_COL = "2f7bad91-04cb-46d0-b737-457ce2aae3a9"
PHONE_COL = "ca31b960-f211-4b0f-93c7-a6ea8d32e8d2"
RETURNS_ID = "6256e1cf-b4df-45e3-a09f-e1da5e246fa9"
RETURNS_FK = "415ccfc3-f8cf-4a23-89ee-9a59f9f02d75"
PROMOTIONS_ID = "05c6e408-7ef9-440c-a22a-40da754770ff"


def _column(col_id: str, name: str, data_type: str, **kwargs: object) -> dict:
    payload: dict = {
        "id": col_id,
        "name": name,
        "dataType": data_type,
        "maxLength": None,
        "precision": None,
        "scale": None,
        "isPrimaryKey": False,
        "isIdentity": False,
        "identitySeed": None,
        "identityIncrement": None,
        "isNullable": True,
        "defaultValue": None,
        "isComputed": False,
        "computedFormula": None,
        "computedPersisted": None,
    }
    payload.update(kwargs)
    return payload


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_schema() -> Schema:
    """users / returns / promotions, as produced by the editing surface."""
    return Schema.model_validate(
        {
            "tables": [
                {
                    "id": USERS_ID,
                    "name": "users",
                    "schema": "dbo",
                    "columns": [
                        _column(
                            USER_ID_COL,
                            "user_id",
                            "int",
                            isPrimaryKey=True,
                            isIdentity=True,
                            identitySeed=1,
                            identityIncrement=1,
                            isNullable=False,
                        ),
                        _column(PHONE_COL, "phone_number", "nvarchar", maxLength="25"),
                    ],
                    "foreignKeys": [],
                },
                {
                    "id": RETURNS_ID,
                    "name": "returns",
                    "schema": "dbo",
                    "columns": [
                        _column(
                            "457002c3-7ffd-4b80-a073-39a8d2aa4791",
                            "return_id",
                            "bigint",
                            isPrimaryKey=True,
                            isIdentity=True,
                            identitySeed=1,
                            identityIncrement=1,
                            isNullable=False,
                        ),
                        _column(
                            "fe92dd38-2c17-41e3-8b5d-a724b012d818",
                            "order_item_id",
                            "bigint",
                            isNullable=False,
                        ),
                    ],
                    "foreignKeys": [
                        {
                            "id": RETURNS_FK,
                            "name": "FK_returns_order_item",
                            "columns": ["order_item_id"],
                            "referencedSchemaName": "dbo",
                            "referencedTableName": "order_items",
                            "referencedColumns": ["order_item_id"],
                            "onDeleteAction": 1,
                            "onUpdateAction": 1,
                        }
                    ],
                },
                {
                    "id": PROMOTIONS_ID,
                    "name": "promotions",
                    "schema": "dbo",
                    "columns": [
                        _column(
                            "b8289d44-399a-4c79-b5cb-a56f014ad602",
                            "promotion_id",
                            "int",
                            isPrimaryKey=True,
                            isIdentity=True,
                            identitySeed=1,
                            identityIncrement=1,
                            isNullable=False,
                        ),
                    ],
                    "foreignKeys": [],
                },
            ]
        }
    )


@pytest.fixture()
def revert_baseline() -> Schema:
    """users(user_id, email) <- orders(order_id, user_id) via FK_orders_users."""
    return Schema.model_validate(
        {
            "tables": [
                {
                    "id": "table-users",
                    "name": "users",
                    "schema": "dbo",
                    "columns": [
                        {"id": "col-user-id", "name": "user_id", "dataType": "int", "isPrimaryKey": True, "isNullable": False},
                        {
                            "id": "col-email",
                            "name": "email",
                            "dataType": "nvarchar",
                            "maxLength": "255",
                            "isPrimaryKey": False,
                            "isNullable": False,
                        },
                    ],
                    "foreignKeys": [],
                },
                {
                    "id": "table-orders",
                    "name": "orders",
                    "schema": "dbo",
                    "columns": [
                        {"id": "col-order-id", "name": "order_id", "dataType": "int", "isPrimaryKey": True, "isNullable": False},
                        {"id": "col-user-ref", "name": "user_id", "dataType": "int", "isPrimaryKey": False, "isNullable": False},
                    ],
                    "foreignKeys": [
                        {
                            "id": "fk-orders-users",
                            "name": "FK_orders_users",
                            "columns": ["user_id"],
                            "referencedSchemaName": "dbo",
                            "referencedTableName": "users",
                            "referencedColumns": ["user_id"],
                            "onDeleteAction": 1,
                            "onUpdateAction": 1,
                        }
                    ],
                },
            ]
        }
    )


@pytest.fixture()
def shop_schema() -> Schema:
    """Five-table fixture loaded from ``fixtures/shop_schema.json``."""
    return load_schema_file(FIXTURES_DIR / "shop_schema.json")


@pytest.fixture()
def revert_messages() -> RevertMessages:
    return RevertMessages(
        cannot_revert_foreign_key=(
            "Cannot revert: The referenced table or columns no longer exist in the current schema."
        ),
        cannot_revert_deleted_column="Cannot revert: This column is referenced by a deleted foreign key.",
    )
