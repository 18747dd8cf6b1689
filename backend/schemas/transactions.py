from pydantic import BaseModel
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal


class TransactionLineItem(BaseModel):
    id: int
    product_id: int
    quantity: Decimal
    unit_sale_price: Optional[Decimal] = None

    class Config:
        from_attributes = True


class Transaction(BaseModel):
    id: int
    customer_id: Optional[int] = None
    lender_id: Optional[int] = None
    amount: Decimal
    description: Optional[str] = None
    category: Optional[str] = None
    date: date
    related_invoice_id: Optional[int] = None
    related_invoice_number: Optional[str] = None
    created_at: Optional[datetime] = None
    line_items: List[TransactionLineItem] = []

    class Config:
        from_attributes = True
