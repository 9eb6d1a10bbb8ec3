from __future__ import annotations

from househelp.domain.entities.pricing import DiscountType

HOURS_PER_DAY = 8


def calculate_total_price(
    hourly_rate: float,
    hours: float,
    days: float = 0,
    discount_percentage: float = 0,
    hours_per_day: int = HOURS_PER_DAY,
) -> float:
    """
    Charge for a duration at an hourly rate, with the package discount applied.
    Days are billed as hours_per_day hours each. No rounding is applied.
    """
    total_hours = hours + days * hours_per_day
    subtotal = hourly_rate * total_hours

    if discount_percentage > 0:
        subtotal = subtotal * (1 - discount_percentage / 100)

    return subtotal


def calculate_discounted_price(
    original_price: float,
    discount_type: DiscountType | str,
    discount_value: float,
) -> float:
    """Apply a promo discount. Fixed discounts never take the price below zero."""
    if discount_type == DiscountType.percentage:
        return original_price * (1 - discount_value / 100)
    return max(0.0, original_price - discount_value)


def format_amount(amount: float) -> str:
    return f"{amount:.2f}"
