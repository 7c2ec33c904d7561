from decimal import Decimal
from types import SimpleNamespace

import pytest

from storefront.domain.exceptions import InvalidInputException
from storefront.domain.services.pricing_service import (
    available_stock,
    ensure_in_stock,
    line_unit_price,
    totals,
)


def product(price="20.00", discount_price=None, quantity=5):
    return SimpleNamespace(
        name="Shirt",
        price=Decimal(price),
        discount_price=Decimal(discount_price) if discount_price else None,
        quantity=quantity,
    )


def variant(price=None, discount_price=None, quantity=2):
    return SimpleNamespace(
        sku="SHIRT-RED-M",
        price=Decimal(price) if price else None,
        discount_price=Decimal(discount_price) if discount_price else None,
        quantity=quantity,
    )


def test_discount_wins_over_price():
    assert line_unit_price(product("20.00", "15.00")) == Decimal("15.00")
    assert line_unit_price(product("20.00")) == Decimal("20.00")


def test_variant_price_overrides_product():
    assert line_unit_price(product("20.00", "15.00"), variant("25.00")) == Decimal("25.00")
    assert line_unit_price(product("20.00"), variant("25.00", "22.50")) == Decimal("22.50")


def test_variant_without_price_falls_back_to_product():
    assert line_unit_price(product("20.00", "18.00"), variant()) == Decimal("18.00")


def test_stock_comes_from_variant_when_given():
    assert available_stock(product(quantity=5)) == 5
    assert available_stock(product(quantity=5), variant(quantity=2)) == 2

    ensure_in_stock(product(quantity=5), None, 5)
    with pytest.raises(InvalidInputException) as exc:
        ensure_in_stock(product(quantity=5), variant(quantity=2), 3)
    assert "SHIRT-RED-M" in exc.value.detail
    assert exc.value.details == {"quantity": "at most 2 available"}


def test_totals_count_units():
    count, total = totals([(Decimal("8.00"), 2), (Decimal("1.50"), 3)])
    assert count == 5
    assert total == Decimal("20.50")

    assert totals([]) == (0, Decimal("0.00"))
