"""Receipt schemas.

Every rule reports its own message through ``PydanticCustomError`` so the
first entry of the error list is the message shown to the user. Fields carry
empty defaults with ``validate_default`` so a missing field fails with the same
message as a blank one.
"""

import re
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from backend.app.core.settings import get_settings

MOBILE_PATTERN = re.compile(r"^[0-9]{10}$")

MAX_NAME_LENGTH = 100
MAX_ADDRESS_LENGTH = 200
MAX_ITEM_NAME_LENGTH = 100
MAX_QUANTITY = Decimal("10000")
MAX_PRICE = Decimal("1000000")


def _fail(message: str):
    raise PydanticCustomError("receipt_input", message)


def _default_tax_rate() -> Decimal:
    return Decimal(str(get_settings().default_tax_rate))


class ReceiptItemIn(BaseModel):
    name: str = Field(default="", validate_default=True)
    quantity: Optional[Decimal] = Field(default=None, validate_default=True)
    price: Optional[Decimal] = Field(default=None, validate_default=True)

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            _fail("Item name required")
        if len(value) > MAX_ITEM_NAME_LENGTH:
            _fail("Item name must be at most 100 characters")
        return value

    @field_validator("quantity")
    @classmethod
    def check_quantity(cls, value: Optional[Decimal]) -> Decimal:
        if value is None or value <= 0:
            _fail("Quantity must be positive")
        if value > MAX_QUANTITY:
            _fail("Quantity must be at most 10000")
        return value

    @field_validator("price")
    @classmethod
    def check_price(cls, value: Optional[Decimal]) -> Decimal:
        if value is None or value <= 0:
            _fail("Price must be positive")
        if value > MAX_PRICE:
            _fail("Price must be at most 1000000")
        return value


class ReceiptCreate(BaseModel):
    customer_name: str = Field(default="", validate_default=True)
    mobile_number: str = Field(default="", validate_default=True)
    address: str = Field(default="", validate_default=True)
    branch: str = Field(default="", validate_default=True)
    receipt_date: Optional[date] = Field(default=None, validate_default=True)
    items: List[ReceiptItemIn] = Field(default_factory=list, validate_default=True)
    tax_rate: Decimal = Field(default_factory=_default_tax_rate)

    age: Optional[str] = Field(default=None, max_length=20)
    bp: Optional[str] = Field(default=None, max_length=20)
    pulse: Optional[str] = Field(default=None, max_length=20)

    @field_validator("customer_name")
    @classmethod
    def check_customer_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            _fail("Name required")
        if len(value) > MAX_NAME_LENGTH:
            _fail("Name must be at most 100 characters")
        return value

    @field_validator("mobile_number")
    @classmethod
    def check_mobile_number(cls, value: str) -> str:
        value = value.strip()
        if not MOBILE_PATTERN.match(value):
            _fail("Enter valid 10-digit mobile")
        return value

    @field_validator("address")
    @classmethod
    def check_address(cls, value: str) -> str:
        value = value.strip()
        if not value:
            _fail("Address required")
        if len(value) > MAX_ADDRESS_LENGTH:
            _fail("Address must be at most 200 characters")
        return value

    @field_validator("branch")
    @classmethod
    def check_branch(cls, value: str) -> str:
        if not value:
            _fail("Branch required")
        return value

    @field_validator("receipt_date", mode="before")
    @classmethod
    def check_receipt_date(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            _fail("Date required")
        return value

    @field_validator("items")
    @classmethod
    def check_items(cls, value: List[ReceiptItemIn]) -> List[ReceiptItemIn]:
        if not value:
            _fail("Add at least one item")
        return value

    @field_validator("tax_rate")
    @classmethod
    def check_tax_rate(cls, value: Decimal) -> Decimal:
        if value < 0 or value > 100:
            _fail("Tax rate must be between 0 and 100")
        return value


class ReceiptItemRead(BaseModel):
    name: str
    quantity: Decimal
    price: Decimal


class ReceiptRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: int
    customer_name: str
    mobile_number: str
    address: Optional[str] = None
    branch: Optional[str] = None
    age: Optional[str] = None
    bp: Optional[str] = None
    pulse: Optional[str] = None
    receipt_date: date
    items: List[ReceiptItemRead]
    subtotal: Decimal
    tax_rate: Decimal
    tax_amount: Decimal
    total_amount: Decimal
    created_at: datetime
    updated_at: datetime


class ReceiptSummary(BaseModel):
    """Row shape used by history and admin listings."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    customer_name: str
    mobile_number: str
    receipt_date: date
    total_amount: Decimal
    branch: Optional[str] = None
    created_at: datetime


class BranchOptions(BaseModel):
    branches: List[str]
    default_branch: Optional[str] = None
    default_tax_rate: Decimal
