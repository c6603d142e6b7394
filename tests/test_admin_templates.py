import pytest
from fastapi.testclient import TestClient

from backend.app.core.dev_seed import ensure_default_template
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.main import app
from backend.app.models.receipt_template import ReceiptTemplate


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


def test_create_template_fills_defaults():
    client = TestClient(app)
    token = register_and_login(client, "tmpl1@example.com", "secret")
    resp = client.post("/admin/templates", json={"name": "Plain"}, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 201
    data = resp.json()
    assert data["name"] == "Plain"
    assert data["header_bg_color"] == "#1a1a1a"
    assert data["header_text_color"] == "#ffffff"
    assert data["body_bg_color"] == "#ffffff"
    assert data["body_text_color"] == "#000000"
    assert data["accent_color"] == "#3b82f6"
    assert data["font_family"] == "Arial"
    assert data["is_default"] is False


def test_create_template_keeps_given_colours():
    client = TestClient(app)
    token = register_and_login(client, "tmpl2@example.com", "secret")
    resp = client.post(
        "/admin/templates",
        json={"name": "Teal", "accent_color": "#0f766e", "font_family": "Georgia", "header_bg_color": ""},
        headers={"Authorization": f"Bearer {token}"},
    )
    data = resp.json()
    assert data["accent_color"] == "#0f766e"
    assert data["font_family"] == "Georgia"
    assert data["header_bg_color"] == "#1a1a1a"


def test_template_name_is_required():
    client = TestClient(app)
    token = register_and_login(client, "tmpl3@example.com", "secret")
    resp = client.post("/admin/templates", json={"name": "   "}, headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Template name is required"


def test_templates_listed_newest_first():
    client = TestClient(app)
    token = register_and_login(client, "tmpl4@example.com", "secret")
    for name in ("First", "Second", "Third"):
        client.post("/admin/templates", json={"name": name}, headers={"Authorization": f"Bearer {token}"})
    resp = client.get("/admin/templates", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert [t["name"] for t in resp.json()] == ["Third", "Second", "First"]


def test_delete_template():
    client = TestClient(app)
    token = register_and_login(client, "tmpl5@example.com", "secret")
    created = client.post("/admin/templates", json={"name": "Temp"}, headers={"Authorization": f"Bearer {token}"}).json()

    resp = client.delete(f"/admin/templates/{created['id']}", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert client.get("/admin/templates", headers={"Authorization": f"Bearer {token}"}).json() == []

    again = client.delete(f"/admin/templates/{created['id']}", headers={"Authorization": f"Bearer {token}"})
    assert again.status_code == 404


def test_default_template_cannot_be_deleted(monkeypatch):
    client = TestClient(app)
    token = register_and_login(client, "tmpl6@example.com", "secret")
    monkeypatch.delenv("PYTEST_CURRENT_TEST", raising=False)
    with SessionLocal() as db:
        ensure_default_template(db)
        ensure_default_template(db)
        defaults = db.query(ReceiptTemplate).filter(ReceiptTemplate.is_default.is_(True)).all()
        assert len(defaults) == 1
        default_id = defaults[0].id

    resp = client.delete(f"/admin/templates/{default_id}", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Default template cannot be deleted"


def test_templates_are_admin_only():
    client = TestClient(app)
    register_and_login(client, "tmpl7@example.com", "secret")
    token_user = register_and_login(client, "tmpl7b@example.com", "secret")
    resp = client.post("/admin/templates", json={"name": "Nope"}, headers={"Authorization": f"Bearer {token_user}"})
    assert resp.status_code == 403


def test_template_values_are_length_limited():
    client = TestClient(app)
    token = register_and_login(client, "tmpl8@example.com", "secret")
    resp = client.post(
        "/admin/templates",
        json={"name": "Long", "accent_color": "#" + "a" * 30},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 422
    resp = client.post(
        "/admin/templates",
        json={"name": "Long", "font_family": "F" * 101},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 422
    assert client.get("/admin/templates", headers={"Authorization": f"Bearer {token}"}).json() == []
