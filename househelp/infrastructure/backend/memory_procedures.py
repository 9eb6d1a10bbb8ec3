from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from househelp.application.exceptions import BackendUpstreamError
from househelp.application.utils.geo import haversine_distance
from househelp.infrastructure.backend.memory_backend import MemoryBackend, Procedure

INVOICE_DUE_DAYS = 14


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _first(rows: list[dict[str, Any]], **eq: Any) -> dict[str, Any] | None:
    for row in rows:
        if all(row.get(key) == value for key, value in eq.items()):
            return row
    return None


def get_service_pricing(db: MemoryBackend, params: dict[str, Any]) -> list[dict[str, Any]]:
    package_id = params.get("package_id_param")
    return [
        row
        for row in db.rows("service_pricing")
        if row.get("service_type") == params["service_type_param"]
        and (package_id is None or row.get("package_id") == package_id)
    ]


def get_worker_pricing(db: MemoryBackend, params: dict[str, Any]) -> list[dict[str, Any]]:
    service_type = params.get("service_type_param")
    return [
        row
        for row in db.rows("worker_pricing")
        if row.get("worker_id") == params["worker_id_param"]
        and (service_type is None or row.get("service_type") == service_type)
    ]


def validate_discount_code(db: MemoryBackend, params: dict[str, Any]) -> list[dict[str, Any]]:
    code = _first(db.rows("discount_codes"), code=params["code_param"])
    if code is None:
        return []

    def invalid(message: str) -> list[dict[str, Any]]:
        return [{"is_valid": False, "discount_type": None, "discount_value": None, "error_message": message}]

    if not code.get("is_active", True):
        return invalid("This discount code is no longer active")
    expires_at = code.get("expires_at")
    if expires_at and datetime.fromisoformat(expires_at) < _now():
        return invalid("This discount code has expired")
    if params["order_value_param"] < code.get("min_order_value", 0):
        return invalid("Order value too low for this discount code")
    return [
        {
            "is_valid": True,
            "discount_type": code["discount_type"],
            "discount_value": code["discount_value"],
            "error_message": None,
        }
    ]


def get_wallet_balance(db: MemoryBackend, params: dict[str, Any]) -> float:
    wallet = _first(db.rows("wallets"), user_id=params["user_id_param"])
    return wallet["balance"] if wallet else 0


def process_wallet_payment(db: MemoryBackend, params: dict[str, Any]) -> dict[str, Any]:
    wallet = _first(db.rows("wallets"), user_id=params["user_id_param"])
    if wallet is None:
        return {"success": False, "message": "Wallet not found", "transaction_id": None}
    amount = params["amount_param"]
    if wallet["balance"] < amount:
        return {"success": False, "message": "Insufficient wallet balance", "transaction_id": None}

    wallet["balance"] -= amount
    transaction_id = str(uuid.uuid4())
    db.rows("wallet_transactions").append(
        {
            "id": transaction_id,
            "wallet_id": wallet["id"],
            "amount": amount,
            "type": "payment",
            "status": "completed",
            "reference_id": params.get("reference_id_param"),
            "description": params.get("description_param"),
            "created_at": _now().isoformat(),
        }
    )
    return {"success": True, "message": "Payment successful", "transaction_id": transaction_id}


def mark_notifications_read(db: MemoryBackend, params: dict[str, Any]) -> None:
    ids = params.get("notification_ids")
    for row in db.rows("notifications"):
        if row.get("user_id") == params["user_id_param"] and (ids is None or row.get("id") in ids):
            row["is_read"] = True


def create_notification(db: MemoryBackend, params: dict[str, Any]) -> str:
    notification_id = str(uuid.uuid4())
    db.rows("notifications").append(
        {
            "id": notification_id,
            "user_id": params["user_id_param"],
            "title": params["title_param"],
            "body": params.get("body_param"),
            "type": params["type_param"],
            "data": params.get("data_param"),
            "is_read": False,
            "created_at": _now().isoformat(),
        }
    )
    return notification_id


def get_user_rating(db: MemoryBackend, params: dict[str, Any]) -> dict[str, Any]:
    ratings = [
        row["rating"]
        for row in db.rows("reviews")
        if row.get("reviewee_id") == params["user_id_param"] and row.get("status") == "published"
    ]
    if not ratings:
        return {"average_rating": 0, "total_reviews": 0}
    return {"average_rating": sum(ratings) / len(ratings), "total_reviews": len(ratings)}


def can_review_booking(db: MemoryBackend, params: dict[str, Any]) -> bool:
    booking = _first(db.rows("bookings"), id=params["booking_id_param"])
    if booking is None or booking.get("status") != "completed":
        return False
    parties = {booking.get("household_id"), booking.get("worker_id")}
    reviewer, reviewee = params["reviewer_id_param"], params["reviewee_id_param"]
    if reviewer == reviewee or {reviewer, reviewee} != parties:
        return False
    already = _first(db.rows("reviews"), booking_id=booking["id"], reviewer_id=reviewer)
    return already is None


def update_worker_location(db: MemoryBackend, params: dict[str, Any]) -> None:
    worker_id = params["worker_id_param"]
    row = _first(db.rows("worker_locations"), worker_id=worker_id)
    if row is None:
        row = {"worker_id": worker_id}
        db.rows("worker_locations").append(row)
    row.update({"latitude": params["lat"], "longitude": params["lng"], "updated_at": _now().isoformat()})


def is_within_geofence(db: MemoryBackend, params: dict[str, Any]) -> list[dict[str, Any]]:
    return [
        {"zone_name": zone["zone_name"]}
        for zone in db.rows("geofences")
        if haversine_distance(params["lat"], params["lng"], zone["latitude"], zone["longitude"])
        <= zone["radius_meters"]
    ]


def get_translations(db: MemoryBackend, params: dict[str, Any]) -> list[dict[str, Any]]:
    return [
        {"namespace": row["namespace"], "key": row["key"], "value": row["value"]}
        for row in db.rows("translations")
        if row.get("language_code") == params["language_code_param"]
    ]


def set_user_language(db: MemoryBackend, params: dict[str, Any]) -> None:
    user_id = params["user_id_param"]
    row = _first(db.rows("user_preferences"), user_id=user_id)
    if row is None:
        row = {"user_id": user_id}
        db.rows("user_preferences").append(row)
    row["language_code"] = params["language_code_param"]


def generate_invoice(db: MemoryBackend, params: dict[str, Any]) -> str:
    invoices = db.rows("invoices")
    invoice_id = str(uuid.uuid4())
    now = _now()
    items = [
        {"id": str(uuid.uuid4()), "invoice_id": invoice_id, **item} for item in params.get("items_param") or []
    ]
    invoices.append(
        {
            "id": invoice_id,
            "booking_id": params.get("booking_id_param"),
            "user_id": params["user_id_param"],
            "worker_id": params["worker_id_param"],
            "invoice_number": f"INV-{len(invoices) + 1:06d}",
            "amount": params["amount_param"],
            "currency": "RWF",
            "tax_amount": params["tax_amount_param"],
            "total_amount": params["total_amount_param"],
            "status": "draft",
            "due_date": (now + timedelta(days=INVOICE_DUE_DAYS)).date().isoformat(),
            "notes": params.get("notes_param"),
            "items": items,
            "created_at": now.isoformat(),
            "updated_at": now.isoformat(),
        }
    )
    return invoice_id


def generate_invoice_pdf(db: MemoryBackend, params: dict[str, Any]) -> None:
    # no renderer in memory; pdf_url stays empty
    if _first(db.rows("invoices"), id=params["invoice_id_param"]) is None:
        raise BackendUpstreamError("Invoice not found", status=404)


def mark_invoice_paid(db: MemoryBackend, params: dict[str, Any]) -> None:
    invoice = _first(db.rows("invoices"), id=params["invoice_id_param"])
    if invoice is None:
        raise BackendUpstreamError("Invoice not found", status=404)
    now = _now().isoformat()
    invoice.update({"status": "paid", "paid_date": now, "updated_at": now})


def get_top_services(db: MemoryBackend, params: dict[str, Any]) -> list[dict[str, Any]]:
    column = "worker_id" if params["is_worker_param"] else "household_id"
    counts: dict[str, int] = {}
    for booking in db.rows("bookings"):
        if booking.get(column) == params["user_id_param"]:
            counts[booking["service_type"]] = counts.get(booking["service_type"], 0) + 1
    return [
        {"service_type": service_type, "count": count}
        for service_type, count in sorted(counts.items(), key=lambda item: -item[1])
    ]


def _empty(db: MemoryBackend, params: dict[str, Any]) -> list[dict[str, Any]]:
    return []


DEFAULT_PROCEDURES: dict[str, Procedure] = {
    "get_service_pricing": get_service_pricing,
    "get_worker_pricing": get_worker_pricing,
    "validate_discount_code": validate_discount_code,
    "get_wallet_balance": get_wallet_balance,
    "process_wallet_payment": process_wallet_payment,
    "mark_notifications_read": mark_notifications_read,
    "create_notification": create_notification,
    "get_user_rating": get_user_rating,
    "can_review_booking": can_review_booking,
    "update_worker_location": update_worker_location,
    "is_within_geofence": is_within_geofence,
    "get_translations": get_translations,
    "set_user_language": set_user_language,
    "generate_invoice": generate_invoice,
    "generate_invoice_pdf": generate_invoice_pdf,
    "mark_invoice_paid": mark_invoice_paid,
    "get_top_services": get_top_services,
    "get_worker_performance": _empty,
    "get_household_metrics": _empty,
    "get_service_metrics": _empty,
    "get_booking_trends": _empty,
    "get_time_distribution": _empty,
    "get_top_locations": _empty,
}


def build_memory_backend(tables: dict[str, list[dict[str, Any]]] | None = None) -> MemoryBackend:
    return MemoryBackend(tables=tables, procedures=DEFAULT_PROCEDURES)
