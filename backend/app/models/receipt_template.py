"""Receipt template model: colours and font applied by the renderer."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from backend.app.db.base_class import Base

DEFAULT_TEMPLATE_VALUES = {
    "header_bg_color": "#1a1a1a",
    "header_text_color": "#ffffff",
    "body_bg_color": "#ffffff",
    "body_text_color": "#000000",
    "accent_color": "#3b82f6",
    "font_family": "Arial",
}


class ReceiptTemplate(Base):
    __tablename__ = "receipt_templates"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    header_bg_color = Column(String(20), nullable=False, default=DEFAULT_TEMPLATE_VALUES["header_bg_color"])
    header_text_color = Column(String(20), nullable=False, default=DEFAULT_TEMPLATE_VALUES["header_text_color"])
    body_bg_color = Column(String(20), nullable=False, default=DEFAULT_TEMPLATE_VALUES["body_bg_color"])
    body_text_color = Column(String(20), nullable=False, default=DEFAULT_TEMPLATE_VALUES["body_text_color"])
    accent_color = Column(String(20), nullable=False, default=DEFAULT_TEMPLATE_VALUES["accent_color"])
    font_family = Column(String(100), nullable=False, default=DEFAULT_TEMPLATE_VALUES["font_family"])
    is_default = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
