"""
Tests for payment validation and processing.
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy.orm import Session

from test_fixtures import (
    auth_headers,
    catalog,
    client,
    db_session,
    make_order,
    make_user,
)
from domain.enums import OrderStatus, PaymentMethod, UserRole
from domain.schemas.order_schemas import PaymentDetails
from services.payment_service import (
    PaymentService,
    expiry_valid,
    luhn_valid,
    mask_card_number,
)

VALID_CARD = {
    "method": "CREDIT_CARD",
    "card_number": "4111 1111 1111 1111",
    "expiry_date": "12/99",
    "cvv": "123",
    "cardholder_name": "Amina Ngono",
}

VALID_MOMO = {
    "method": "MOBILE_MONEY",
    "mobile_money_provider": "MTN",
    "mobile_money_number": "+237 650 000 000",
}


def test_luhn_and_expiry_helpers():
    assert luhn_valid("4111111111111111")
    assert luhn_valid("5500005555555559")
    assert not luhn_valid("4111111111111112")
    assert not luhn_valid("4111abcd11111111")

    now = datetime(2026, 6, 15, tzinfo=timezone.utc)
    assert expiry_valid("06/26", now)
    assert expiry_valid("01/27", now)
    assert not expiry_valid("05/26", now)
    assert not expiry_valid("13/30", now)
    assert not expiry_valid("2030-01", now)
    assert not expiry_valid(None, now)

    assert mask_card_number("4111111111111111") == "**** **** **** 1111"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"card_number": "4111111111111112"}, "Invalid card number"),
        ({"card_number": "4111"}, "Invalid card number"),
        ({"expiry_date": "01/20"}, "Invalid or expired expiry date"),
        ({"cvv": "12"}, "Invalid CVV"),
        ({"cvv": "abc"}, "Invalid CVV"),
        ({"cardholder_name": "  "}, "Cardholder name is required"),
    ],
)
def test_invalid_card_details(overrides, message):
    details = PaymentDetails(**{**VALID_CARD, **overrides})
    assert PaymentService.validate_details(details) == (False, message)


def test_mobile_money_and_other_methods():
    assert PaymentService.validate_details(PaymentDetails(**VALID_MOMO))[0] is True

    no_provider = PaymentDetails(**{**VALID_MOMO, "mobile_money_provider": ""})
    assert PaymentService.validate_details(no_provider) == (
        False,
        "Mobile money provider is required",
    )
    short_number = PaymentDetails(**{**VALID_MOMO, "mobile_money_number": "1234"})
    assert PaymentService.validate_details(short_number) == (
        False,
        "Invalid mobile money number",
    )

    for method in (PaymentMethod.CASH, PaymentMethod.BANK_TRANSFER):
        assert PaymentService.validate_details(PaymentDetails(method=method))[0] is True


def test_validate_endpoint():
    ok = client.post("/api/payments/validate", json=VALID_CARD)
    assert ok.status_code == 200
    assert ok.json()["valid"] is True

    bad = client.post(
        "/api/payments/validate", json={**VALID_CARD, "card_number": "1234567890123"}
    )
    assert bad.status_code == 200
    assert bad.json() == {"valid": False, "message": "Invalid card number"}


def test_process_card_payment(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)
    order = make_order(db_session, customer, [(ndole, 2)])

    resp = client.post(
        "/api/payments/process",
        headers=auth_headers(customer),
        json={"order_id": order.id, "details": VALID_CARD},
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "PAID"
    assert body["method"] == "CREDIT_CARD"
    assert body["order_id"] == order.id
    assert body["transaction_id"].startswith("TXN-")
    assert body["payment_details"]["card"] == "**** **** **** 1111"
    assert "cvv" not in body["payment_details"]
    assert "4111111111111111" not in resp.text

    fetched = client.get(f"/api/payments/order/{order.id}", headers=auth_headers(customer))
    assert fetched.status_code == 200
    assert fetched.json()["id"] == body["id"]

    order_view = client.get(f"/api/orders/{order.id}", headers=auth_headers(customer))
    assert order_view.json()["payment"]["status"] == "PAID"


def test_paying_twice_conflicts(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)
    order = make_order(db_session, customer, [(ndole, 1)])
    payload = {"order_id": order.id, "details": VALID_MOMO}

    first = client.post("/api/payments/process", headers=auth_headers(customer), json=payload)
    assert first.status_code == 201
    second = client.post("/api/payments/process", headers=auth_headers(customer), json=payload)
    assert second.status_code == 409


def test_process_rejections(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)
    stranger = make_user(db_session)
    order = make_order(db_session, customer, [(ndole, 1)])
    cancelled = make_order(db_session, customer, [(ndole, 1)], status=OrderStatus.CANCELLED)

    missing = client.post(
        "/api/payments/process",
        headers=auth_headers(customer),
        json={"order_id": 9999, "details": VALID_CARD},
    )
    assert missing.status_code == 404

    foreign = client.post(
        "/api/payments/process",
        headers=auth_headers(stranger),
        json={"order_id": order.id, "details": VALID_CARD},
    )
    assert foreign.status_code == 403

    on_cancelled = client.post(
        "/api/payments/process",
        headers=auth_headers(customer),
        json={"order_id": cancelled.id, "details": VALID_CARD},
    )
    assert on_cancelled.status_code == 400

    bad_card = client.post(
        "/api/payments/process",
        headers=auth_headers(customer),
        json={"order_id": order.id, "details": {**VALID_CARD, "cvv": "1"}},
    )
    assert bad_card.status_code == 400
    assert bad_card.json()["error"]["message"] == "Invalid CVV"


def test_get_payment_visibility(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)
    stranger = make_user(db_session)
    admin = make_user(db_session, role=UserRole.ADMIN)
    order = make_order(db_session, customer, [(ndole, 1)])

    # no payment yet
    assert client.get(
        f"/api/payments/order/{order.id}", headers=auth_headers(customer)
    ).status_code == 404

    client.post(
        "/api/payments/process",
        headers=auth_headers(customer),
        json={"order_id": order.id, "details": {"method": "CASH"}},
    )
    assert client.get(
        f"/api/payments/order/{order.id}", headers=auth_headers(admin)
    ).status_code == 200
    assert client.get(
        f"/api/payments/order/{order.id}", headers=auth_headers(stranger)
    ).status_code == 403
