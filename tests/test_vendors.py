"""
Tests for the vendor directory: public browsing and admin management.
"""

import pytest
from sqlalchemy.orm import Session

from test_fixtures import (
    auth_headers,
    client,
    db_session,
    make_meal,
    make_user,
    make_vendor,
)
from domain.enums import UserRole
from domain.schemas.catalog_schemas import VendorCreate, VendorUpdate
from repositories import VendorRepository
from services.vendor_service import VendorService
from app.exceptions import ConflictError, NotFoundError


VENDOR_PAYLOAD = {
    "name": "Chez Pierre",
    "address": "University Campus, Building B",
    "email": "contact@chezpierre.com",
    "description": "Local food with French influence",
}


def test_admin_creates_vendor(db_session: Session):
    admin = make_user(db_session, role=UserRole.ADMIN)
    resp = client.post("/api/vendors", headers=auth_headers(admin), json=VENDOR_PAYLOAD)

    assert resp.status_code == 201
    body = resp.json()
    assert body["name"] == "Chez Pierre"
    assert body["is_active"] is True


def test_create_vendor_requires_admin(db_session: Session):
    customer = make_user(db_session)
    resp = client.post(
        "/api/vendors", headers=auth_headers(customer), json=VENDOR_PAYLOAD
    )
    assert resp.status_code == 403

    anonymous = client.post("/api/vendors", json=VENDOR_PAYLOAD)
    assert anonymous.status_code == 401


def test_duplicate_vendor_email_conflict(db_session: Session):
    admin = make_user(db_session, role=UserRole.ADMIN)
    make_vendor(db_session, email="contact@chezpierre.com")

    resp = client.post("/api/vendors", headers=auth_headers(admin), json=VENDOR_PAYLOAD)
    assert resp.status_code == 409


def test_list_active_and_search(db_session: Session):
    make_vendor(db_session, name="Zebra Grill", description="Grilled fish")
    make_vendor(db_session, name="Alpha Bites", description="Snacks and juice")
    make_vendor(db_session, name="Closed Corner", is_active=False)

    all_vendors = client.get("/api/vendors").json()
    assert all_vendors["total"] == 3

    active = client.get("/api/vendors/active").json()
    assert [v["name"] for v in active["data"]] == ["Alpha Bites", "Zebra Grill"]

    found = client.get("/api/vendors/search", params={"term": "FISH"}).json()
    assert [v["name"] for v in found["data"]] == ["Zebra Grill"]


def test_get_vendor_and_menu(db_session: Session):
    vendor = make_vendor(db_session)
    make_meal(db_session, vendor, name="Ndolé")
    make_meal(db_session, vendor, name="Egusi", price="3000")

    resp = client.get(f"/api/vendors/{vendor.id}")
    assert resp.status_code == 200

    menu = client.get(f"/api/vendors/{vendor.id}/meals").json()
    assert [m["name"] for m in menu["meals"]] == ["Ndolé", "Egusi"]

    assert client.get("/api/vendors/777").status_code == 404
    assert client.get("/api/vendors/777/meals").status_code == 404


def test_update_activation_and_delete(db_session: Session):
    admin = make_user(db_session, role=UserRole.ADMIN)
    vendor = make_vendor(db_session)
    headers = auth_headers(admin)

    updated = client.put(
        f"/api/vendors/{vendor.id}",
        headers=headers,
        json={"description": "Now with delivery"},
    )
    assert updated.status_code == 200
    assert updated.json()["description"] == "Now with delivery"
    assert updated.json()["name"] == "Mama Africa Kitchen"

    deactivated = client.patch(
        f"/api/vendors/{vendor.id}/activation",
        headers=headers,
        json={"is_active": False},
    )
    assert deactivated.json()["is_active"] is False

    assert client.delete(f"/api/vendors/{vendor.id}", headers=headers).status_code == 200
    assert client.get(f"/api/vendors/{vendor.id}").status_code == 404


def test_vendor_service_email_rules(db_session: Session):
    first = VendorService.create_vendor(
        db_session, VendorCreate(name="One", address="A", email="one@vendors.cm")
    )
    second = VendorService.create_vendor(
        db_session, VendorCreate(name="Two", address="B", email="two@vendors.cm")
    )

    # keeping its own email is fine
    VendorService.update_vendor(db_session, first.id, VendorUpdate(email="one@vendors.cm"))

    with pytest.raises(ConflictError):
        VendorService.update_vendor(
            db_session, second.id, VendorUpdate(email="ONE@vendors.cm")
        )
    with pytest.raises(NotFoundError):
        VendorService.delete_vendor(db_session, 9999)


def test_vendor_search_escapes_like_wildcards(db_session: Session):
    make_vendor(db_session, name="Snack_Bar", description="Juice and puff-puff")
    make_vendor(db_session, name="Grill House", description="Open 24/7")

    underscore = client.get("/api/vendors/search", params={"term": "_"}).json()
    assert [v["name"] for v in underscore["data"]] == ["Snack_Bar"]

    percent = client.get("/api/vendors/search", params={"term": "%"}).json()
    assert percent["total"] == 0


def test_vendor_repository_exists(db_session: Session):
    vendor = make_vendor(db_session)
    repo = VendorRepository(db_session)

    assert repo.exists(vendor.id)
    assert not repo.exists(vendor.id + 1000)
