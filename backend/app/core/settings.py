import os


def _env_list(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [part.strip() for part in raw.split(";") if part.strip()]


class Settings:
    def __init__(self):
        self.app_name = os.getenv("APP_NAME", "Clinic Receipts")
        self.api_version = "1.0.0"
        self.environment = os.getenv("ENVIRONMENT", "development")
        self.secret_key = os.getenv("SECRET_KEY", "CHANGE_ME")
        self.SECRET_KEY = self.secret_key
        self.access_token_expire_minutes = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
        self.ACCESS_TOKEN_EXPIRE_MINUTES = self.access_token_expire_minutes
        self.database_url = os.getenv("DATABASE_URL", "sqlite:///./clinic_receipts.db")
        self.log_level = os.getenv("LOG_LEVEL", "INFO")

        # Business identity printed on receipts and shown on the profile page
        self.business_name = os.getenv("BUSINESS_NAME", "Clinic Receipts")
        self.business_email = os.getenv("BUSINESS_EMAIL", "clinic@example.com")
        self.business_phone = os.getenv("BUSINESS_PHONE", "0000000000")
        self.branches = _env_list("BRANCHES", "Near Shivaji Chowk Banka;Nimiya Belhar Banka")
        self.default_tax_rate = os.getenv("DEFAULT_TAX_RATE", "18")

        # Rendering
        self.receipt_layout = os.getenv("RECEIPT_LAYOUT", "overlay")
        self.receipt_background_image = os.getenv("RECEIPT_BACKGROUND_IMAGE") or None
        self.receipt_background_url = os.getenv("RECEIPT_BACKGROUND_URL") or None
        self.currency_symbol = os.getenv("CURRENCY_SYMBOL", "₹")
        self.pdf_currency_symbol = os.getenv("PDF_CURRENCY_SYMBOL", "Rs.")
        self.pdf_dpi = int(os.getenv("PDF_DPI", "150"))

    @property
    def default_branch(self) -> str | None:
        return self.branches[0] if self.branches else None


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
