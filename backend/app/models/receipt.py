"""Receipt model: one itemized bill per customer visit."""

import uuid

from sqlalchemy import JSON, Column, Date, DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from backend.app.core.time import utc_now
from backend.app.db.base_class import Base


def _new_receipt_id() -> str:
    return str(uuid.uuid4())


class Receipt(Base):
    __tablename__ = "receipts"

    id = Column(String(36), primary_key=True, default=_new_receipt_id)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    customer_name = Column(String(100), nullable=False)
    mobile_number = Column(String(10), nullable=False)
    address = Column(String(200), nullable=True)
    branch = Column(String(255), nullable=True)
    age = Column(String(20), nullable=True)
    bp = Column(String(20), nullable=True)
    pulse = Column(String(20), nullable=True)
    receipt_date = Column(Date, nullable=False)

    # Ordered list of {"name", "quantity", "price"}
    items = Column(JSON, nullable=False, default=list)

    subtotal = Column(Numeric(10, 2), nullable=False)
    tax_rate = Column(Numeric(5, 2), nullable=False, default=0)
    tax_amount = Column(Numeric(10, 2), nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)

    owner = relationship("User", back_populates="receipts")
