import asyncio

import pytest

from househelp.application.use_cases.discounts import DiscountUseCase
from househelp.application.use_cases.pricing import PricingUseCase
from househelp.domain.entities.pricing import DiscountType, DiscountValidation, ServicePricing

WEEKLY_CLEANING = ServicePricing(
    service_type="cleaning",
    package_id="weekly",
    package_name="Weekly",
    price_hourly=2000,
    min_hours=8,
    discount_percentage=10,
)


def test_service_pricing_filters_by_package(backend):
    uc = PricingUseCase(backend)
    all_cleaning = asyncio.run(uc.get_service_pricing("cleaning"))
    weekly = asyncio.run(uc.get_service_pricing("cleaning", "weekly"))

    assert [p.package_id for p in all_cleaning] == ["basic", "weekly"]
    assert len(weekly) == 1
    assert weekly[0].discount_percentage == 10


def test_pricing_options_fall_back_to_standard_packages(backend):
    uc = PricingUseCase(backend)
    options = asyncio.run(uc.get_pricing_options("cleaning", worker_id="w-without-rates"))
    assert [o.package_id for o in options] == ["basic", "weekly"]


def test_pricing_options_prefer_worker_rates(backend):
    backend.rows("worker_pricing").append(
        {"worker_id": "w1", "service_type": "cleaning", "price_hourly": 2600, "is_custom": True}
    )
    uc = PricingUseCase(backend)
    options = asyncio.run(uc.get_pricing_options("cleaning", worker_id="w1"))

    assert len(options) == 1
    assert options[0].package_id == "custom"
    assert options[0].package_name == "Custom"
    assert options[0].price_hourly == 2600
    assert options[0].min_hours == 1
    assert options[0].discount_percentage == 0


def test_pricing_reads_return_empty_when_backend_fails(backend):
    backend.fail("get_service_pricing")
    backend.fail("service_packages")
    uc = PricingUseCase(backend)

    assert asyncio.run(uc.get_service_pricing("cleaning")) == []
    assert asyncio.run(uc.get_service_packages()) == []


def test_subscription_plans_and_user_subscription(backend):
    backend.rows("user_subscriptions").append(
        {
            "id": "sub1",
            "user_id": "u1",
            "plan_id": "plus",
            "subscription_plans": {"name": "HouseHelp Plus"},
            "status": "active",
            "start_date": "2024-01-01",
            "end_date": None,
            "is_auto_renew": True,
        }
    )
    uc = PricingUseCase(backend)

    plans = asyncio.run(uc.get_subscription_plans())
    assert plans[0].features == ["priority_matching", "no_booking_fee"]

    subscription = asyncio.run(uc.get_user_subscription("u1"))
    assert subscription is not None
    assert subscription.plan_name == "HouseHelp Plus"
    assert subscription.end_date is None
    assert asyncio.run(uc.get_user_subscription("nobody")) is None


def test_validate_known_and_unknown_codes(backend):
    uc = DiscountUseCase(backend)

    valid = asyncio.run(uc.validate_discount_code("WELCOME10", 5000))
    assert valid.is_valid
    assert valid.discount_type == DiscountType.percentage
    assert valid.discount_value == 10

    unknown = asyncio.run(uc.validate_discount_code("NOPE", 5000))
    assert not unknown.is_valid
    assert unknown.error_message == "Invalid discount code"


def test_validate_reports_backend_rejection_reason(backend):
    uc = DiscountUseCase(backend)
    result = asyncio.run(uc.validate_discount_code("SAVE5000", 4000))
    assert not result.is_valid
    assert result.error_message == "Order value too low for this discount code"


def test_validate_returns_generic_error_when_backend_fails(backend):
    backend.fail("validate_discount_code")
    uc = DiscountUseCase(backend)
    result = asyncio.run(uc.validate_discount_code("WELCOME10", 5000))
    assert not result.is_valid
    assert result.error_message == "Error validating discount code"


def test_quote_without_code(backend):
    quote = DiscountUseCase(backend).build_quote(WEEKLY_CLEANING, hours=4, days=1)

    assert quote.total_hours == 12
    assert quote.subtotal == pytest.approx(21600)
    assert quote.total == pytest.approx(21600)
    assert not quote.discount_code_applied
    assert quote.checkout_enabled


def test_quote_applies_promo_after_package_discount(backend):
    uc = DiscountUseCase(backend)
    promo = DiscountValidation(is_valid=True, discount_type=DiscountType.percentage, discount_value=10)
    quote = uc.build_quote(WEEKLY_CLEANING, hours=4, days=1, discount=promo)

    assert quote.subtotal == pytest.approx(21600)
    assert quote.total == pytest.approx(19440)
    assert quote.discount_code_applied


def test_quote_ignores_invalid_promo(backend):
    uc = DiscountUseCase(backend)
    rejected = DiscountValidation(is_valid=False, error_message="Invalid discount code")
    quote = uc.build_quote(WEEKLY_CLEANING, hours=4, discount=rejected)
    assert quote.total == quote.subtotal
    assert not quote.discount_code_applied


def test_empty_duration_disables_checkout(backend):
    quote = DiscountUseCase(backend).build_quote(WEEKLY_CLEANING, hours=0, days=0)
    assert quote.total == 0
    assert not quote.checkout_enabled


def test_quote_with_code_validates_against_discounted_subtotal(backend):
    uc = DiscountUseCase(backend)
    quote, validation = asyncio.run(uc.quote_with_code(WEEKLY_CLEANING, 4, 1, " SAVE5000 "))

    assert validation.is_valid
    assert quote.total == pytest.approx(16600)
    assert backend.rpc_calls[-1] == (
        "validate_discount_code",
        {"code_param": "SAVE5000", "order_value_param": pytest.approx(21600)},
    )


def test_quote_with_rejected_code_keeps_subtotal(backend):
    uc = DiscountUseCase(backend)
    quote, validation = asyncio.run(uc.quote_with_code(WEEKLY_CLEANING, 2, 0, "SAVE5000"))

    assert not validation.is_valid
    assert quote.total == quote.subtotal
    assert not quote.discount_code_applied


def test_blank_code_is_rejected_before_backend_call(backend):
    uc = DiscountUseCase(backend)
    with pytest.raises(ValueError, match="Please enter a discount code"):
        asyncio.run(uc.quote_with_code(WEEKLY_CLEANING, 2, 0, "   "))
    assert backend.rpc_calls == []


def test_validate_rejects_blank_code_without_backend_call(backend):
    uc = DiscountUseCase(backend)
    for code in ("", "   "):
        with pytest.raises(ValueError, match="Please enter a discount code"):
            asyncio.run(uc.validate_discount_code(code, 5000))
    assert backend.rpc_calls == []
