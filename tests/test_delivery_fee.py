from types import SimpleNamespace

import pytest

from products.delivery import (
    calculate_delivery_fee,
    is_same_city,
    normalize_city,
    validate_delivery_config,
)

PRICING = {"sameTownFee": 1500, "otherCityFee": 2000}


def product(**overrides):
    fields = {
        "city": "Douala",
        "deliveryType": "VENDOR_DELIVERY",
        "freeDelivery": False,
        "flatDeliveryFee": None,
        "sameCityDeliveryFee": None,
        "otherCityDeliveryFee": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.mark.parametrize("config, destination, fee, fee_type", [
    ({"freeDelivery": True, "flatDeliveryFee": 800}, "Douala", 0, "free"),
    ({"flatDeliveryFee": 1000}, "Douala", 1000, "flat"),
    ({"flatDeliveryFee": 1000}, "Yaoundé", 1000, "flat"),
    ({"sameCityDeliveryFee": 500, "otherCityDeliveryFee": 2500}, "douala ", 500, "same_city"),
    ({"sameCityDeliveryFee": 500, "otherCityDeliveryFee": 2500}, "Bafoussam", 2500, "other_city"),
    ({"sameCityDeliveryFee": 0, "otherCityDeliveryFee": 2500}, "DOUALA", 0, "same_city"),
    ({"otherCityDeliveryFee": 2500}, "Douala", 0, "free"),
    ({}, "Limbe", 0, "free"),
])
def test_vendor_delivery_fee_table(config, destination, fee, fee_type):
    result = calculate_delivery_fee(product(**config), destination, platform_pricing=PRICING)
    assert result["available"] is True
    assert result["fee"] == fee
    assert result["feeType"] == fee_type


def test_platform_delivery_uses_admin_pricing_without_quote():
    jemo = product(deliveryType="JEMO_RIDER")
    assert calculate_delivery_fee(jemo, "Douala", PRICING)["fee"] == 1500
    other = calculate_delivery_fee(jemo, "Kribi", PRICING)
    assert other["fee"] == 2000
    assert other["feeType"] == "jemo"
    assert other["rule"] == "OTHER_CITY"


def test_platform_delivery_uses_agency_quote():
    quote = {"available": True, "fee": 1200, "agencyId": 7, "agencyName": "Speedy", "rule": "SAME_CITY"}
    result = calculate_delivery_fee(product(deliveryType="JEMO_RIDER"), "Douala", PRICING, quote=quote)
    assert result == {
        "available": True, "fee": 1200, "feeType": "jemo",
        "agencyId": 7, "agencyName": "Speedy", "rule": "SAME_CITY",
    }


def test_platform_delivery_unavailable_when_quote_unavailable():
    quote = {"available": False, "fee": 0, "rule": "OTHER_CITY",
             "message": "Delivery is not available for pickups from Douala yet."}
    result = calculate_delivery_fee(product(deliveryType="JEMO_RIDER"), "Garoua", PRICING, quote=quote)
    assert result["available"] is False
    assert result["reason"] == "Delivery is not available for pickups from Douala yet."


def test_platform_delivery_unavailable_without_pricing():
    result = calculate_delivery_fee(product(deliveryType="JEMO_RIDER"), "Douala")
    assert result["available"] is False


def test_calculation_is_deterministic():
    config = product(sameCityDeliveryFee=300, otherCityDeliveryFee=900)
    first = calculate_delivery_fee(config, "Buea", PRICING)
    assert all(calculate_delivery_fee(config, "Buea", PRICING) == first for _ in range(5))


@pytest.mark.parametrize("raw, expected", [
    ("  Yaoundé ", "yaounde"),
    ("Ebolowa", "ebolowa"),
    ("NGAOUNDÉRÉ", "ngaoundere"),
    ("Kumba   Town", "kumba town"),
    ("", ""),
    (None, ""),
])
def test_normalize_city(raw, expected):
    assert normalize_city(raw) == expected


def test_is_same_city_ignores_case_and_accents():
    assert is_same_city("Yaoundé", "YAOUNDE")
    assert not is_same_city("Douala", "Yaounde")


def test_delivery_config_requires_a_fee_unless_free():
    errors = validate_delivery_config({"localDelivery": True})
    assert errors == ["Set a flat delivery fee or both same-city and other-city fees, or enable free delivery"]
    assert validate_delivery_config({"localDelivery": True, "flatDeliveryFee": 1000}) == []
    assert validate_delivery_config(
        {"localDelivery": True, "sameCityDeliveryFee": 0, "otherCityDeliveryFee": 1500}
    ) == []
    assert validate_delivery_config({"localDelivery": True, "freeDelivery": True}) == []


def test_delivery_config_requires_an_option():
    errors = validate_delivery_config({"freeDelivery": True, "localDelivery": False})
    assert errors == ["Select at least one delivery option: pickup, local or nationwide"]


def test_platform_delivery_config_needs_no_fees():
    assert validate_delivery_config({"deliveryType": "JEMO_RIDER"}) == []
