from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.main import app
from backend.app.models.receipt import Receipt
from backend.app.services.dashboard_service import summarize_receipts


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def register_and_login(client: TestClient, email: str, password: str) -> str:
    client.post("/auth/register", json={"email": email, "password": password})
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return resp.json()["access_token"]


def make_receipt(client: TestClient, token: str, receipt_date: str, price, branch="Near Shivaji Chowk Banka"):
    payload = {
        "customer_name": "Patient",
        "mobile_number": "9876543210",
        "address": "Banka",
        "branch": branch,
        "receipt_date": receipt_date,
        "items": [{"name": "Visit", "quantity": 1, "price": price}],
        "tax_rate": 0,
    }
    resp = client.post("/receipts", json=payload, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 201
    return resp.json()["id"]


def test_empty_dashboard():
    client = TestClient(app)
    token = register_and_login(client, "empty@example.com", "secret")
    resp = client.get("/dashboard/summary", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    data = resp.json()
    assert Decimal(data["total_income"]) == 0
    assert data["total_receipts"] == 0
    assert Decimal(data["average_receipt_value"]) == 0
    assert data["branches"] == []
    assert data["monthly"] == []


def test_dashboard_totals_and_branches():
    client = TestClient(app)
    token = register_and_login(client, "dash@example.com", "secret")
    other = register_and_login(client, "dash-other@example.com", "secret")
    make_receipt(client, token, "2024-01-05", 100)
    make_receipt(client, token, "2024-01-20", 200, branch="Nimiya Belhar Banka")
    make_receipt(client, token, "2024-02-03", 300)
    make_receipt(client, other, "2024-02-03", 5000)

    data = client.get("/dashboard/summary", headers={"Authorization": f"Bearer {token}"}).json()
    assert Decimal(data["total_income"]) == Decimal("600")
    assert data["total_receipts"] == 3
    assert Decimal(data["average_receipt_value"]) == Decimal("200")

    branches = {b["branch"]: b for b in data["branches"]}
    assert [b["branch"] for b in data["branches"]] == ["Near Shivaji Chowk Banka", "Nimiya Belhar Banka"]
    assert Decimal(branches["Near Shivaji Chowk Banka"]["amount"]) == Decimal("400")
    assert branches["Near Shivaji Chowk Banka"]["count"] == 2
    assert branches["Nimiya Belhar Banka"]["count"] == 1

    assert [(m["month"], Decimal(m["amount"])) for m in data["monthly"]] == [
        ("Jan 2024", Decimal("300")),
        ("Feb 2024", Decimal("300")),
    ]


def test_monthly_keeps_last_six_in_creation_order():
    client = TestClient(app)
    token = register_and_login(client, "months@example.com", "secret")
    # The most recent month is created first, so it falls outside the window
    dates = ["2024-07-01", "2024-01-01", "2024-02-01", "2024-03-01", "2024-04-01", "2024-05-01", "2024-06-01"]
    ids = [make_receipt(client, token, d, 10) for d in dates]

    start = datetime(2024, 8, 1, tzinfo=timezone.utc)
    with SessionLocal() as db:
        for offset, receipt_id in enumerate(ids):
            receipt = db.query(Receipt).filter(Receipt.id == receipt_id).first()
            receipt.created_at = start + timedelta(minutes=offset)
        db.commit()

    data = client.get("/dashboard/summary", headers={"Authorization": f"Bearer {token}"}).json()
    assert [m["month"] for m in data["monthly"]] == [
        "Jan 2024",
        "Feb 2024",
        "Mar 2024",
        "Apr 2024",
        "May 2024",
        "Jun 2024",
    ]
    assert data["total_receipts"] == 7


def test_dashboard_requires_auth():
    client = TestClient(app)
    assert client.get("/dashboard/summary").status_code == 401


def test_summarize_receipts_groups_missing_branch():
    rows = [
        (Decimal("10.00"), date(2024, 3, 1), None),
        (Decimal("5.50"), date(2024, 3, 9), ""),
        (Decimal("4.50"), date(2024, 4, 2), "Main"),
    ]
    summary = summarize_receipts(rows)
    assert summary["total_income"] == Decimal("20.00")
    assert summary["branches"][0] == {"branch": "Unspecified", "amount": Decimal("15.50"), "count": 2}
    assert summary["monthly"] == [
        {"month": "Mar 2024", "amount": Decimal("15.50")},
        {"month": "Apr 2024", "amount": Decimal("4.50")},
    ]


def test_average_is_rounded_to_cents():
    rows = [(Decimal("10"), date(2024, 1, 1), "A")] * 3 + [(Decimal("0.01"), date(2024, 1, 2), "A")]
    assert summarize_receipts(rows)["average_receipt_value"] == Decimal("7.50")
