"""
Tests for order placement and the order workflow over HTTP.

ORDER FLOW
==========

1. POST   /api/orders                  customer places order (PENDING)
2. PATCH  /api/orders/{id}/status      vendor confirms (CONFIRMED)
3. PATCH  /api/orders/{id}/assign      admin assigns agent (PREPARING)
4. PATCH  /api/orders/{id}/status      vendor marks READY_FOR_PICKUP
5. PATCH  /api/orders/{id}/status      agent: OUT_FOR_DELIVERY, then DELIVERED
"""

from decimal import Decimal

from sqlalchemy.orm import Session

from test_fixtures import (
    auth_headers,
    catalog,
    client,
    db_session,
    make_meal,
    make_order,
    make_user,
    make_vendor,
)
from domain.enums import DeliveryStatus, OrderStatus, PaymentStatus, UserRole
from domain.models import Order, Payment
from services.order_service import OrderService


def _amount(value) -> Decimal:
    return Decimal(str(value))


def test_customer_places_order(db_session: Session):
    _, ndole, poulet = catalog(db_session)
    customer = make_user(db_session)

    resp = client.post(
        "/api/orders",
        headers=auth_headers(customer),
        json={
            "items": [
                {"meal_id": ndole.id, "quantity": 2, "special_instructions": "Spicy"},
                {"meal_id": poulet.id, "quantity": 1},
            ],
            "delivery_address": "Block C, Room 4",
            "delivery_notes": "Call on arrival",
        },
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["status"] == "PENDING"
    assert _amount(body["total_amount"]) == Decimal("11200")
    assert body["customer"]["id"] == customer.id
    assert "password_hash" not in body["customer"]
    assert [item["meal_name"] for item in body["items"]] == ["Ndolé", "Poulet DG"]
    assert _amount(body["items"][0]["subtotal"]) == Decimal("7000")
    assert body["items"][0]["special_instructions"] == "Spicy"
    assert body["delivery"]["status"] == "PENDING"
    assert body["delivery"]["delivery_location"] == "Block C, Room 4"
    assert body["payment"] is None


def test_duplicate_meal_lines_are_merged(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)

    resp = client.post(
        "/api/orders",
        headers=auth_headers(customer),
        json={
            "items": [
                {"meal_id": ndole.id, "quantity": 1},
                {"meal_id": ndole.id, "quantity": 2},
            ]
        },
    )
    assert resp.status_code == 201
    body = resp.json()
    assert len(body["items"]) == 1
    assert body["items"][0]["quantity"] == 3
    assert _amount(body["total_amount"]) == Decimal("10500")
    # falls back to the customer's saved address
    assert body["delivery_address"] == customer.address


def test_creating_order_with_nonexistent_meal_returns_400(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)

    resp = client.post(
        "/api/orders",
        headers=auth_headers(customer),
        json={"items": [{"meal_id": ndole.id, "quantity": 1}, {"meal_id": 9999, "quantity": 1}]},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "One or more meals not found or not available"

    db_session.expire_all()
    assert db_session.query(Order).count() == 0


def test_creating_order_with_unavailable_meal_returns_400(db_session: Session):
    vendor = make_vendor(db_session)
    sold_out = make_meal(db_session, vendor, name="Okok", is_available=False)
    customer = make_user(db_session)

    resp = client.post(
        "/api/orders",
        headers=auth_headers(customer),
        json={"items": [{"meal_id": sold_out.id, "quantity": 1}]},
    )
    assert resp.status_code == 400


def test_order_validation_errors(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)
    headers = auth_headers(customer)

    empty = client.post("/api/orders", headers=headers, json={"items": []})
    assert empty.status_code == 422

    zero = client.post(
        "/api/orders",
        headers=headers,
        json={"items": [{"meal_id": ndole.id, "quantity": 0}]},
    )
    assert zero.status_code == 422


def test_only_customers_place_orders(db_session: Session):
    _, ndole, _ = catalog(db_session)
    admin = make_user(db_session, role=UserRole.ADMIN)

    resp = client.post(
        "/api/orders",
        headers=auth_headers(admin),
        json={"items": [{"meal_id": ndole.id, "quantity": 1}]},
    )
    assert resp.status_code == 403


def test_list_orders_for_admin_and_vendor(db_session: Session):
    mama, ndole, _ = catalog(db_session)
    pierre = make_vendor(db_session, name="Chez Pierre")
    jollof = make_meal(db_session, pierre, name="Jollof Rice", price="3200")
    customer = make_user(db_session)
    make_order(db_session, customer, [(ndole, 1)])
    make_order(db_session, customer, [(jollof, 2)], status=OrderStatus.CONFIRMED)

    admin = make_user(db_session, role=UserRole.ADMIN)
    all_orders = client.get("/api/orders", headers=auth_headers(admin)).json()
    assert all_orders["total"] == 2

    confirmed = client.get(
        "/api/orders", headers=auth_headers(admin), params={"status": "CONFIRMED"}
    ).json()
    assert confirmed["total"] == 1

    pierre_staff = make_user(db_session, role=UserRole.VENDOR, vendor=pierre)
    # vendor filter in the query string is overridden by the caller's vendor
    vendor_view = client.get(
        "/api/orders",
        headers=auth_headers(pierre_staff),
        params={"vendor_id": mama.id},
    ).json()
    assert vendor_view["total"] == 1
    assert vendor_view["data"][0]["items"][0]["meal_name"] == "Jollof Rice"

    unlinked = make_user(db_session, role=UserRole.VENDOR)
    empty = client.get("/api/orders", headers=auth_headers(unlinked)).json()
    assert empty["total"] == 0
    assert empty["data"] == []

    assert client.get("/api/orders", headers=auth_headers(customer)).status_code == 403


def test_my_orders_and_visibility(db_session: Session):
    _, ndole, _ = catalog(db_session)
    owner = make_user(db_session)
    stranger = make_user(db_session)
    order = make_order(db_session, owner, [(ndole, 1)])

    mine = client.get("/api/orders/my-orders", headers=auth_headers(owner)).json()
    assert [o["id"] for o in mine["data"]] == [order.id]
    theirs = client.get("/api/orders/my-orders", headers=auth_headers(stranger)).json()
    assert theirs["total"] == 0

    assert client.get(f"/api/orders/{order.id}", headers=auth_headers(owner)).status_code == 200
    assert client.get(f"/api/orders/{order.id}", headers=auth_headers(stranger)).status_code == 403
    assert client.get("/api/orders/8888", headers=auth_headers(owner)).status_code == 404


def test_full_delivery_flow(db_session: Session):
    vendor, ndole, _ = catalog(db_session)
    customer = make_user(db_session)
    staff = make_user(db_session, role=UserRole.VENDOR, vendor=vendor)
    agent = make_user(db_session, role=UserRole.DELIVERY_AGENT)
    admin = make_user(db_session, role=UserRole.ADMIN)
    order = make_order(db_session, customer, [(ndole, 2)])
    url = f"/api/orders/{order.id}"

    confirmed = client.patch(
        f"{url}/status", headers=auth_headers(staff), json={"status": "CONFIRMED"}
    )
    assert confirmed.json()["status"] == "CONFIRMED"

    assigned = client.patch(
        f"{url}/assign",
        headers=auth_headers(admin),
        json={"delivery_agent_id": agent.id},
    )
    assert assigned.status_code == 200
    body = assigned.json()
    assert body["status"] == "PREPARING"
    assert body["delivery_agent"]["id"] == agent.id
    assert body["delivery"]["status"] == "ASSIGNED"
    assert body["delivery"]["tracking_number"].startswith("TRK-")

    ready = client.patch(
        f"{url}/status", headers=auth_headers(staff), json={"status": "READY_FOR_PICKUP"}
    )
    assert ready.json()["status"] == "READY_FOR_PICKUP"

    assigned_list = client.get("/api/orders/delivery", headers=auth_headers(agent)).json()
    assert [o["id"] for o in assigned_list["data"]] == [order.id]

    out = client.patch(
        f"{url}/status", headers=auth_headers(agent), json={"status": "OUT_FOR_DELIVERY"}
    )
    assert out.json()["delivery"]["status"] == "IN_TRANSIT"

    delivered = client.patch(
        f"{url}/status", headers=auth_headers(agent), json={"status": "DELIVERED"}
    )
    assert delivered.status_code == 200
    assert delivered.json()["status"] == "DELIVERED"
    assert delivered.json()["delivery"]["status"] == "DELIVERED"
    assert delivered.json()["delivery"]["actual_delivery_time"] is not None


def test_invalid_transition_returns_400(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)
    order = make_order(db_session, customer, [(ndole, 1)])

    resp = client.patch(
        f"/api/orders/{order.id}/status",
        headers=auth_headers(customer),
        json={"status": "CONFIRMED"},
    )
    assert resp.status_code == 400
    assert "Invalid status transition from PENDING to CONFIRMED" in resp.json()["error"]["message"]


def test_status_update_by_unrelated_user_is_forbidden(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)
    stranger = make_user(db_session)
    agent = make_user(db_session, role=UserRole.DELIVERY_AGENT)
    order = make_order(db_session, customer, [(ndole, 1)], status=OrderStatus.READY_FOR_PICKUP)

    for user in (stranger, agent):
        resp = client.patch(
            f"/api/orders/{order.id}/status",
            headers=auth_headers(user),
            json={"status": "CANCELLED"},
        )
        assert resp.status_code == 403


def test_assign_requires_delivery_agent(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)
    admin = make_user(db_session, role=UserRole.ADMIN)
    order = make_order(db_session, customer, [(ndole, 1)])

    not_agent = client.patch(
        f"/api/orders/{order.id}/assign",
        headers=auth_headers(admin),
        json={"delivery_agent_id": customer.id},
    )
    assert not_agent.status_code == 404

    by_customer = client.patch(
        f"/api/orders/{order.id}/assign",
        headers=auth_headers(customer),
        json={"delivery_agent_id": customer.id},
    )
    assert by_customer.status_code == 403


def test_customer_cancels_pending_order(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)
    order = make_order(db_session, customer, [(ndole, 1)])

    resp = client.delete(f"/api/orders/{order.id}/cancel", headers=auth_headers(customer))
    assert resp.status_code == 200
    assert resp.json()["status"] == "CANCELLED"
    assert resp.json()["delivery"]["status"] == "FAILED"


def test_cancelling_a_delivered_order_returns_400(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)
    order = make_order(db_session, customer, [(ndole, 1)], status=OrderStatus.DELIVERED)

    resp = client.delete(f"/api/orders/{order.id}/cancel", headers=auth_headers(customer))
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Cannot cancel order in DELIVERED status"


def test_cancel_by_other_customer_forbidden(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)
    stranger = make_user(db_session)
    order = make_order(db_session, customer, [(ndole, 1)])

    resp = client.delete(f"/api/orders/{order.id}/cancel", headers=auth_headers(stranger))
    assert resp.status_code == 403


def test_cancel_refunds_paid_order(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)
    admin = make_user(db_session, role=UserRole.ADMIN)
    order = make_order(db_session, customer, [(ndole, 1)], status=OrderStatus.CONFIRMED)
    db_session.add(
        Payment(order_id=order.id, amount=order.total_amount, status=PaymentStatus.PAID)
    )
    db_session.commit()

    resp = client.delete(f"/api/orders/{order.id}/cancel", headers=auth_headers(admin))
    assert resp.status_code == 200
    assert resp.json()["payment"]["status"] == "REFUNDED"


def test_order_service_create_and_cancel(db_session: Session):
    _, ndole, poulet = catalog(db_session)
    customer = make_user(db_session)

    order = make_order(db_session, customer, [(ndole, 1), (poulet, 2)])
    assert order.total_amount == Decimal("11900")
    assert order.delivery.status == DeliveryStatus.PENDING
    assert [item.unit_price for item in order.items] == [Decimal("3500"), Decimal("4200")]

    cancelled = OrderService.cancel_order(db_session, order.id, customer)
    assert cancelled.status == OrderStatus.CANCELLED


def test_create_order_route_uses_service(monkeypatch, db_session: Session):
    customer = make_user(db_session)
    _, ndole, _ = catalog(db_session)
    real_order = make_order(db_session, customer, [(ndole, 1)])
    calls = []

    def fake_create(db, payload, user):
        calls.append((payload.delivery_address, user.id))
        return real_order

    monkeypatch.setattr(OrderService, "create_order", fake_create)

    resp = client.post(
        "/api/orders",
        headers=auth_headers(customer),
        json={"items": [{"meal_id": ndole.id, "quantity": 1}], "delivery_address": "Gate 2"},
    )
    assert resp.status_code == 201
    assert resp.json()["id"] == real_order.id
    assert calls == [("Gate 2", customer.id)]


def test_out_of_range_numbers_are_rejected(db_session: Session):
    _, ndole, _ = catalog(db_session)
    customer = make_user(db_session)
    headers = auth_headers(customer)

    huge_quantity = client.post(
        "/api/orders",
        headers=headers,
        json={"items": [{"meal_id": ndole.id, "quantity": 10**19}]},
    )
    assert huge_quantity.status_code == 422

    huge_meal_id = client.post(
        "/api/orders",
        headers=headers,
        json={"items": [{"meal_id": 10**19, "quantity": 1}]},
    )
    assert huge_meal_id.status_code == 422

    huge_path_id = client.get("/api/orders/10000000000000000000", headers=headers)
    assert huge_path_id.status_code == 422
    assert huge_path_id.json()["error"]["code"] == "VALIDATION_ERROR"

    admin = make_user(db_session, role=UserRole.ADMIN)
    huge_filter = client.get(
        "/api/orders", headers=auth_headers(admin), params={"customer_id": 2**31}
    )
    assert huge_filter.status_code == 422


def test_order_total_must_fit_amount_column(db_session: Session):
    vendor = make_vendor(db_session)
    banquet = make_meal(db_session, vendor, name="Royal Banquet", price="60000000")
    customer = make_user(db_session)

    resp = client.post(
        "/api/orders",
        headers=auth_headers(customer),
        json={"items": [{"meal_id": banquet.id, "quantity": 2}]},
    )
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "SERVICE_VALIDATION_ERROR"

    db_session.expire_all()
    assert db_session.query(Order).count() == 0
