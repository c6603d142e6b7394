"""Admin view schemas."""

from typing import List

from pydantic import BaseModel

from backend.app.schemas.receipt import ReceiptSummary


class AdminUserReceipts(BaseModel):
    user_id: int
    user_name: str
    receipts: List[ReceiptSummary]
