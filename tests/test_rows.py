import pytest

from househelp.application.exceptions import BackendContractError
from househelp.application.utils.rows import entities_from_rows, entity_from_row
from househelp.domain.entities.pricing import ServicePricing, SubscriptionPlan


def test_unknown_columns_are_dropped():
    pricing = entity_from_row(
        ServicePricing,
        {"service_type": "cooking", "package_id": "basic", "package_name": "Basic", "price_hourly": 2500, "extra": 1},
    )
    assert pricing.price_hourly == 2500
    assert pricing.min_hours == 1


def test_null_columns_use_defaults():
    plan = entity_from_row(SubscriptionPlan, {"id": "p", "name": "Plus", "price_monthly": 5000, "features": None})
    assert plan.features == []


def test_overrides_win():
    plan = entity_from_row(SubscriptionPlan, {"id": "p", "name": "Plus", "price_monthly": 5000}, name="Premium")
    assert plan.name == "Premium"


def test_missing_required_column_is_contract_error():
    with pytest.raises(BackendContractError):
        entity_from_row(SubscriptionPlan, {"id": "p"})


def test_rows_must_be_a_list():
    assert entities_from_rows(SubscriptionPlan, None) == []
    with pytest.raises(BackendContractError):
        entities_from_rows(SubscriptionPlan, {"id": "p"})
    with pytest.raises(BackendContractError):
        entities_from_rows(SubscriptionPlan, ["not a row"])
