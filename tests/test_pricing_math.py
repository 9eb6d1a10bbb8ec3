import pytest

from househelp.application.utils.pricing_math import (
    calculate_discounted_price,
    calculate_total_price,
    format_amount,
)
from househelp.domain.entities.pricing import DiscountType


def test_total_price_counts_days_as_eight_hours():
    assert calculate_total_price(2000, hours=0, days=1) == 16000
    assert calculate_total_price(2000, hours=3, days=1) == 22000


def test_total_price_applies_package_discount():
    assert calculate_total_price(2000, hours=3, days=1, discount_percentage=10) == pytest.approx(19800)


def test_total_price_ignores_zero_or_negative_discount():
    assert calculate_total_price(1500, hours=2, discount_percentage=0) == 3000
    assert calculate_total_price(1500, hours=2, discount_percentage=-5) == 3000


def test_total_price_respects_custom_day_length():
    assert calculate_total_price(1000, hours=0, days=2, hours_per_day=10) == 20000


def test_total_price_is_not_rounded():
    assert calculate_total_price(1000.5, hours=1.5) == pytest.approx(1500.75)


def test_zero_duration_costs_nothing():
    assert calculate_total_price(2000, hours=0, days=0, discount_percentage=15) == 0


def test_percentage_promo():
    assert calculate_discounted_price(19800, DiscountType.percentage, 10) == pytest.approx(17820)
    assert calculate_discounted_price(19800, "percentage", 10) == pytest.approx(17820)


def test_fixed_promo_never_goes_negative():
    assert calculate_discounted_price(10000, DiscountType.fixed, 5000) == 5000
    assert calculate_discounted_price(3000, DiscountType.fixed, 5000) == 0


def test_format_amount_two_decimals():
    assert format_amount(19800) == "19800.00"
    assert format_amount(1500.5) == "1500.50"
    assert format_amount(0) == "0.00"


def test_full_package_discount_makes_any_booking_free():
    assert calculate_total_price(2000, hours=3, days=2, discount_percentage=100) == 0
    assert calculate_total_price(1750.5, hours=0.5, days=7, discount_percentage=100) == 0


def test_promo_reference_cases():
    assert calculate_discounted_price(100, "percentage", 20) == pytest.approx(80)
    assert calculate_discounted_price(50, "fixed", 1000) == 0
