"""Receipt template schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from backend.app.models.receipt_template import DEFAULT_TEMPLATE_VALUES


class ReceiptTemplateCreate(BaseModel):
    name: str = Field(default="", max_length=255, validate_default=True)
    header_bg_color: Optional[str] = Field(default=None, max_length=20)
    header_text_color: Optional[str] = Field(default=None, max_length=20)
    body_bg_color: Optional[str] = Field(default=None, max_length=20)
    body_text_color: Optional[str] = Field(default=None, max_length=20)
    accent_color: Optional[str] = Field(default=None, max_length=20)
    font_family: Optional[str] = Field(default=None, max_length=100)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise PydanticCustomError("template_input", "Template name is required")
        return value

    def with_defaults(self) -> dict:
        """Field values with every blank colour or font replaced by its default."""
        values = {"name": self.name}
        for field, default in DEFAULT_TEMPLATE_VALUES.items():
            values[field] = getattr(self, field) or default
        return values


class ReceiptTemplateRead(BaseModel):
    id: int
    name: str
    header_bg_color: str
    header_text_color: str
    body_bg_color: str
    body_text_color: str
    accent_color: str
    font_family: str
    is_default: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
