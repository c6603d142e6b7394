"""Dashboard summary schemas."""

from decimal import Decimal
from typing import List

from pydantic import BaseModel


class BranchSummary(BaseModel):
    branch: str
    amount: Decimal
    count: int


class MonthlySummary(BaseModel):
    month: str
    amount: Decimal


class DashboardSummary(BaseModel):
    total_income: Decimal
    total_receipts: int
    average_receipt_value: Decimal
    branches: List[BranchSummary]
    monthly: List[MonthlySummary]
