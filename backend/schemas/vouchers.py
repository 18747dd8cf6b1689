from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal
from models.vouchers import VoucherType


class VoucherLedgerEntryCreate(BaseModel):
    ledger_id: int
    debit: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    credit: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)


class VoucherInventoryEntryCreate(BaseModel):
    item_id: int
    warehouse_id: Optional[int] = None
    quantity: Decimal  # Sign is decided by the voucher type, not the client
    rate: Decimal = Decimal("0")
    amount: Decimal = Decimal("0")


class VoucherCreate(BaseModel):
    date: date
    voucher_number: str
    voucher_type: VoucherType
    narration: Optional[str] = None
    ledger_entries: List[VoucherLedgerEntryCreate] = Field(..., min_length=2)
    inventory_entries: List[VoucherInventoryEntryCreate] = []

    @field_validator('voucher_number')
    def voucher_number_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError('Voucher number is required')
        return v.strip()


class VoucherEntry(BaseModel):
    id: int
    ledger_id: int
    ledger_name: Optional[str] = None
    debit: Decimal
    credit: Decimal

    class Config:
        from_attributes = True


class VoucherInventoryEntry(BaseModel):
    id: int
    item_id: int
    warehouse_id: Optional[int] = None
    quantity: Decimal
    rate: Decimal
    amount: Decimal

    class Config:
        from_attributes = True


class Voucher(BaseModel):
    id: int
    date: date
    voucher_number: str
    voucher_type: VoucherType
    narration: Optional[str] = None
    total_amount: Decimal
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    entries: List[VoucherEntry] = []
    inventory_entries: List[VoucherInventoryEntry] = []

    class Config:
        from_attributes = True


class GstCalculationDetails(BaseModel):
    company_state: Optional[str] = None
    party_state: Optional[str] = None
    gst_type: str  # CGST_SGST or IGST
