from pydantic import BaseModel
from typing import List, Optional
from datetime import date
from decimal import Decimal


class TrialBalanceRow(BaseModel):
    ledger_id: int
    ledger_name: str
    group_name: str
    debit: Decimal
    credit: Decimal


class TrialBalance(BaseModel):
    end_date: date
    report_data: List[TrialBalanceRow]
    total_debit: Decimal
    total_credit: Decimal


class StockItemBalance(BaseModel):
    id: int
    name: str
    unit_id: int
    unit_name: Optional[str] = None
    gst_rate: Decimal
    opening_qty: Decimal
    opening_rate: Decimal
    current_stock: Decimal
