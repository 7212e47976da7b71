import pytest

from pizza_store.console import Console, parse_boolean_input, safe_float, safe_int
from pizza_store.errors import InvalidInputError


def test_safe_int():
    assert safe_int(" 42 ") == 42
    assert safe_int("0", minimum=1) is None
    assert safe_int("abc") is None


def test_safe_int_rejects_values_sqlite_cannot_store():
    assert safe_int(str(2**63 - 1)) == 2**63 - 1
    assert safe_int("99999999999999999999") is None
    assert safe_int("-99999999999999999999") is None


@pytest.mark.parametrize("raw", ["inf", "-inf", "nan", "Infinity", "free"])
def test_safe_float_rejects_non_finite(raw):
    assert safe_float(raw) is None


def test_parse_boolean_input():
    assert parse_boolean_input(" Yes ")
    assert not parse_boolean_input("maybe")


def test_ask_int_huge_number_is_invalid_input():
    console = Console(reader=lambda _: "99999999999999999999")
    with pytest.raises(InvalidInputError):
        console.ask_int("order id: ")


def test_ask_float_infinity_is_invalid_input():
    console = Console(reader=lambda _: "inf")
    with pytest.raises(InvalidInputError):
        console.ask_float("price: ")
