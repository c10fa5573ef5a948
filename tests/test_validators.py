import math

import pytest

from food_ordering.models import MenuCategory
from food_ordering.services.validators import (
    is_valid_username,
    menu_item_id_of,
    normalize_username,
    parse_quantity,
    round_cents,
    sanitize_category,
    sanitize_price,
    sanitize_string,
)


@pytest.mark.parametrize("username", ["ab", "alice", "Bob_99", "a" * 20, "__", "dog"])
def test_valid_usernames(username):
    assert is_valid_username(username)


@pytest.mark.parametrize("username", ["", "a", "a" * 21, "al ice", "alice!", "élise", "a-b"])
def test_invalid_usernames(username):
    assert not is_valid_username(username)


def test_normalize_username_trims_and_rejects_non_strings():
    assert normalize_username("  alice \n") == "alice"
    assert normalize_username(42) == ""
    assert normalize_username(None) == ""


@pytest.mark.parametrize("raw, expected", [
    (1, 1),
    (3, 3),
    (2.0, 2),
    ("4", 4),
    (" 5 ", 5),
    ("6.0", 6),
])
def test_parse_quantity_accepts_whole_positive_numbers(raw, expected):
    assert parse_quantity(raw) == expected


@pytest.mark.parametrize("raw", [0, -1, 1.5, "1.5", "abc", "", None, True, False, math.inf, math.nan, [1]])
def test_parse_quantity_rejects_everything_else(raw):
    assert parse_quantity(raw) is None


def test_sanitize_price_rounds_to_cents():
    assert sanitize_price(12.3456) == 12.35
    assert sanitize_price("9.5") == 9.5
    assert sanitize_price(7) == 7.0


@pytest.mark.parametrize("raw, expected", [(0.125, 0.13), (2.625, 2.63), ("0.005", 0.01), (2.675, 2.67)])
def test_sanitize_price_rounds_ties_up(raw, expected):
    # 2.675 is stored just below the tie, so it rounds down.
    assert sanitize_price(raw) == expected


def test_round_cents():
    assert round_cents(0.1 + 0.2) == 0.3
    assert round_cents(10.0) == 10.0
    assert round_cents(1.125 * 3) == 3.38


@pytest.mark.parametrize("raw", [0, -3, 0.001, None, "", "free", True, math.inf, math.nan])
def test_sanitize_price_rejects(raw):
    assert sanitize_price(raw) is None


def test_sanitize_string_trims_and_truncates():
    assert sanitize_string("  hi  ") == "hi"
    assert sanitize_string("x" * 500, 100) == "x" * 100
    assert sanitize_string(12) == ""


def test_sanitize_category():
    assert sanitize_category(" drink ") == MenuCategory.DRINK
    assert sanitize_category("soup") is None
    assert sanitize_category(None) is None


def test_menu_item_id_of_accepts_both_spellings_and_int_ids():
    assert menu_item_id_of({"menuItemId": "3"}) == "3"
    assert menu_item_id_of({"menu_item_id": "4"}) == "4"
    assert menu_item_id_of({"menuItemId": 5}) == "5"
    assert menu_item_id_of({"menuItemId": ""}) is None
    assert menu_item_id_of({"menuItemId": True}) is None
    assert menu_item_id_of("3") is None
