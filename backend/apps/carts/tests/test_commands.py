import uuid

import pytest

from apps.carts.commands import (
    CartAddItemCommand,
    normalize_variant,
    MAX_QUANTITY,
    parse_item_id,
    parse_product_id,
    parse_quantity,
)
from apps.carts.exceptions import InvalidCartRequestError, InvalidQuantityError


@pytest.mark.parametrize("raw,expected", [(1, 1), (3, 3), ("2", 2), (" 4 ", 4), (5.0, 5)])
def test_parse_quantity_accepts_positive_integers(raw, expected):
    assert parse_quantity(raw) == expected


@pytest.mark.parametrize("raw", [0, -1, "0", "-3", "abc", "", None, 2.5, "1.5", True, [], {}])
def test_parse_quantity_rejects_invalid_values(raw):
    with pytest.raises(InvalidQuantityError) as exc:
        parse_quantity(raw)
    assert exc.value.code == "VALIDATION_ERROR"


def test_parse_item_id_accepts_uuid_strings():
    value = uuid.uuid4()
    assert parse_item_id(str(value)) == value
    assert parse_item_id(value) is value


@pytest.mark.parametrize("raw", ["not-a-uuid", "123", "", None])
def test_parse_item_id_returns_none_for_malformed_values(raw):
    assert parse_item_id(raw) is None


def test_normalize_variant_treats_blank_as_absent():
    assert normalize_variant(None) is None
    assert normalize_variant("   ") is None
    assert normalize_variant(" Large ") == "Large"


def test_add_item_command_parses_payload():
    command = CartAddItemCommand.from_raw(
        {"productId": "7", "quantity": "2", "size": "Large", "scent": ""}
    )
    assert command.product_id == 7
    assert command.raw_product_id == "7"
    assert command.quantity == 2
    assert command.size == "Large"
    assert command.scent is None


def test_add_item_command_accepts_snake_case_product_id():
    command = CartAddItemCommand.from_raw({"product_id": 3, "quantity": 1})
    assert command.product_id == 3


def test_add_item_command_keeps_non_numeric_reference_for_not_found():
    command = CartAddItemCommand.from_raw({"productId": "abc", "quantity": 1})
    assert command.product_id is None
    assert command.raw_product_id == "abc"


def test_add_item_command_requires_product_id():
    with pytest.raises(InvalidCartRequestError):
        CartAddItemCommand.from_raw({"quantity": 1})


def test_add_item_command_rejects_non_object_payload():
    with pytest.raises(InvalidCartRequestError):
        CartAddItemCommand.from_raw(["productId", 1])


@pytest.mark.parametrize("quantity", [0, -1, "x", None])
def test_add_item_command_rejects_bad_quantity(quantity):
    with pytest.raises(InvalidQuantityError):
        CartAddItemCommand.from_raw({"productId": 1, "quantity": quantity})


@pytest.mark.parametrize("raw", [MAX_QUANTITY + 1, 10**20, str(10**20)])
def test_parse_quantity_rejects_values_past_the_column_limit(raw):
    with pytest.raises(InvalidQuantityError):
        parse_quantity(raw)


def test_parse_quantity_accepts_the_column_limit():
    assert parse_quantity(MAX_QUANTITY) == MAX_QUANTITY


@pytest.mark.parametrize("raw,expected", [(1, 1), (1.0, 1), ("1", 1), (" 12 ", 12)])
def test_parse_product_id_accepts_integral_values(raw, expected):
    assert parse_product_id(raw) == expected


@pytest.mark.parametrize("raw", [1.7, "1.7", 0, -4, 10**30, True, None, "abc"])
def test_parse_product_id_returns_none_for_unmatchable_values(raw):
    assert parse_product_id(raw) is None


def test_add_item_command_does_not_truncate_fractional_product_id():
    command = CartAddItemCommand.from_raw({"productId": 1.7, "quantity": 1})
    assert command.product_id is None
    assert command.raw_product_id == "1.7"


@pytest.mark.parametrize("key", ["size", "scent"])
def test_add_item_command_rejects_overlong_variant(key):
    with pytest.raises(InvalidCartRequestError) as exc:
        CartAddItemCommand.from_raw({"productId": 1, "quantity": 1, key: "x" * 65})
    assert key in exc.value.details


def test_add_item_command_accepts_variant_at_the_limit():
    command = CartAddItemCommand.from_raw({"productId": 1, "quantity": 1, "size": "x" * 64})
    assert command.size == "x" * 64
