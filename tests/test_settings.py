from decimal import Decimal

from backend.app.core.settings import Settings, get_settings


def test_settings_defaults():
    settings = get_settings()
    assert settings.app_name == "Clinic Receipts"
    assert settings.environment == "development"
    assert isinstance(settings.secret_key, str) and settings.secret_key
    assert isinstance(settings.database_url, str) and settings.database_url


def test_receipt_defaults():
    settings = Settings()
    assert Decimal(settings.default_tax_rate) == Decimal("18")
    assert settings.receipt_layout == "overlay"
    assert settings.branches == ["Near Shivaji Chowk Banka", "Nimiya Belhar Banka"]
    assert settings.default_branch == "Near Shivaji Chowk Banka"


def test_branches_read_from_environment(monkeypatch):
    monkeypatch.setenv("BRANCHES", "Main Road; ;Station Road")
    settings = Settings()
    assert settings.branches == ["Main Road", "Station Road"]


def test_no_branches_means_no_default(monkeypatch):
    monkeypatch.setenv("BRANCHES", "")
    settings = Settings()
    assert settings.branches == []
    assert settings.default_branch is None


def test_business_contact_defaults_are_placeholders(monkeypatch):
    monkeypatch.delenv("BUSINESS_EMAIL", raising=False)
    monkeypatch.delenv("BUSINESS_PHONE", raising=False)
    settings = Settings()
    assert settings.business_email == "clinic@example.com"
    assert settings.business_phone == "0000000000"
