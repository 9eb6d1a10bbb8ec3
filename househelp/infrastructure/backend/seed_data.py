from __future__ import annotations

from typing import Any

# Rates in RWF.
SEED_TABLES: dict[str, list[dict[str, Any]]] = {
    "service_packages": [
        {"id": "basic", "name": "Basic", "description": "Pay as you go", "is_active": True},
        {"id": "weekly", "name": "Weekly", "description": "Regular weekly help", "is_active": True},
        {"id": "monthly", "name": "Monthly", "description": "Live-in or full month", "is_active": True},
    ],
    "service_pricing": [
        {
            "service_type": "cleaning",
            "package_id": "basic",
            "package_name": "Basic",
            "price_hourly": 2000,
            "price_daily": 14000,
            "price_weekly": None,
            "price_monthly": None,
            "min_hours": 2,
            "discount_percentage": 0,
        },
        {
            "service_type": "cleaning",
            "package_id": "weekly",
            "package_name": "Weekly",
            "price_hourly": 2000,
            "price_daily": 14000,
            "price_weekly": 80000,
            "price_monthly": None,
            "min_hours": 8,
            "discount_percentage": 10,
        },
        {
            "service_type": "cooking",
            "package_id": "basic",
            "package_name": "Basic",
            "price_hourly": 2500,
            "price_daily": 18000,
            "price_weekly": None,
            "price_monthly": None,
            "min_hours": 2,
            "discount_percentage": 0,
        },
        {
            "service_type": "childcare",
            "package_id": "monthly",
            "package_name": "Monthly",
            "price_hourly": 1800,
            "price_daily": 12000,
            "price_weekly": 70000,
            "price_monthly": 250000,
            "min_hours": 40,
            "discount_percentage": 15,
        },
    ],
    "discount_codes": [
        {"code": "WELCOME10", "discount_type": "percentage", "discount_value": 10, "is_active": True},
        {
            "code": "SAVE5000",
            "discount_type": "fixed",
            "discount_value": 5000,
            "is_active": True,
            "min_order_value": 10000,
        },
    ],
    "subscription_plans": [
        {
            "id": "plus",
            "name": "HouseHelp Plus",
            "description": "Priority matching and no booking fees",
            "price_monthly": 5000,
            "price_yearly": 50000,
            "features": ["priority_matching", "no_booking_fee"],
            "is_active": True,
        },
    ],
    "languages": [
        {"id": "1", "code": "en", "name": "English", "native_name": "English", "is_active": True, "is_default": True},
        {"id": "2", "code": "fr", "name": "French", "native_name": "Français", "is_active": True, "is_default": False},
        {"id": "3", "code": "rw", "name": "Kinyarwanda", "native_name": "Ikinyarwanda", "is_active": True, "is_default": False},
    ],
    "translations": [
        {"language_code": "en", "namespace": "common", "key": "app_name", "value": "HouseHelp"},
        {"language_code": "en", "namespace": "common", "key": "welcome", "value": "Welcome, {{name}}!"},
        {"language_code": "fr", "namespace": "common", "key": "app_name", "value": "HouseHelp"},
        {"language_code": "fr", "namespace": "common", "key": "welcome", "value": "Bienvenue, {{name}} !"},
    ],
    "geofences": [
        {"zone_name": "Kigali", "latitude": -1.9441, "longitude": 30.0619, "radius_meters": 15000},
    ],
    "worker_profiles": [
        {
            "id": "w1",
            "full_name": "Aline Uwase",
            "services": ["cleaning", "cooking"],
            "languages": ["rw", "en"],
            "rating": 4.8,
            "experience_years": 6,
            "hourly_rate": 2200,
            "location": {"latitude": -1.9500, "longitude": 30.0588},
        },
        {
            "id": "w2",
            "full_name": "Jean Habimana",
            "services": ["cleaning"],
            "languages": ["rw", "fr"],
            "rating": 4.2,
            "experience_years": 12,
            "hourly_rate": 1800,
            "location": {"latitude": -1.9700, "longitude": 30.1044},
        },
        {
            "id": "w3",
            "full_name": "Grace Mukamana",
            "services": ["childcare"],
            "languages": ["rw", "en", "fr"],
            "rating": 3.9,
            "experience_years": 3,
            "hourly_rate": 1500,
            "location": {"latitude": -1.9441, "longitude": 30.0619},
        },
    ],
}
