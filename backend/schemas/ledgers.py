from pydantic import BaseModel, field_validator
from typing import List, Optional
from decimal import Decimal
from models.ledgers import LedgerNature


class LedgerGroupCreate(BaseModel):
    name: str
    parent_id: Optional[int] = None
    nature: LedgerNature

    @field_validator('name')
    def name_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError('Group name is required')
        return v.strip()


class LedgerGroupUpdate(BaseModel):
    name: Optional[str] = None
    parent_id: Optional[int] = None
    nature: Optional[LedgerNature] = None


class LedgerGroupNode(BaseModel):
    id: int
    name: str
    parent_id: Optional[int] = None
    nature: LedgerNature
    children: List['LedgerGroupNode'] = []


class LedgerGroup(BaseModel):
    id: int
    name: str
    parent_id: Optional[int] = None
    nature: LedgerNature
    is_default: bool = False

    class Config:
        from_attributes = True


class LedgerCreate(BaseModel):
    name: str
    group_id: int
    opening_balance: Decimal = Decimal("0")
    is_dr: bool = True
    gstin: Optional[str] = None
    state: Optional[str] = None

    @field_validator('name')
    def name_not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError('Ledger name is required')
        return v.strip()


class Ledger(BaseModel):
    id: int
    name: str
    group_id: int
    group_name: Optional[str] = None
    opening_balance: Decimal
    is_dr: bool
    gstin: Optional[str] = None
    state: Optional[str] = None
    is_default: bool = False

    class Config:
        from_attributes = True


class LedgerClosingBalance(BaseModel):
    ledger_id: int
    ledger_name: str
    group_id: int
    group_name: str
    nature: LedgerNature
    opening_balance: Decimal  # Signed: debit positive
    total_debit: Decimal
    total_credit: Decimal
    closing_balance: Decimal  # Signed: debit positive
