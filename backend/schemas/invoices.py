from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal
from models.invoices import InvoiceType, InvoiceStatus


class InvoiceLineItemCreate(BaseModel):
    product_id: Optional[int] = None
    description: str
    hsn_acs_code: Optional[str] = None
    unit_of_measure: Optional[str] = None
    quantity: Decimal  # Magnitude; the invoice type decides the sign
    unit_price: Decimal
    discount_amount: Decimal = Decimal("0")


class InvoiceLineItem(BaseModel):
    id: int
    product_id: Optional[int] = None
    description: str
    hsn_acs_code: Optional[str] = None
    unit_of_measure: Optional[str] = None
    quantity: Decimal
    unit_price: Decimal
    discount_amount: Decimal
    taxable_value: Decimal
    cgst_rate: Decimal
    cgst_amount: Decimal
    sgst_rate: Decimal
    sgst_amount: Decimal
    igst_rate: Decimal
    igst_amount: Decimal
    line_total: Decimal

    class Config:
        from_attributes = True


class InvoiceBase(BaseModel):
    customer_id: int
    invoice_date: date
    due_date: date
    invoice_type: InvoiceType = InvoiceType.TAX_INVOICE
    status: InvoiceStatus = InvoiceStatus.DRAFT
    notes: Optional[str] = None
    party_bill_returns_amount: Decimal = Decimal("0")
    reverse_charge: Optional[str] = "No"
    transportation_mode: Optional[str] = None
    vehicle_number: Optional[str] = None
    date_of_supply: Optional[date] = None
    place_of_supply_state: Optional[str] = None
    place_of_supply_state_code: Optional[str] = None
    bundles_count: Optional[int] = None
    consignee_name: Optional[str] = None
    consignee_address_line1: Optional[str] = None
    consignee_address_line2: Optional[str] = None
    consignee_city_pincode: Optional[str] = None
    consignee_state: Optional[str] = None
    consignee_gstin: Optional[str] = None
    consignee_state_code: Optional[str] = None
    amount_in_words: Optional[str] = None
    original_invoice_number: Optional[str] = None


class InvoiceWrite(InvoiceBase):
    invoice_number: Optional[str] = None
    cgst_rate: Decimal = Field(default=Decimal("0"), ge=0)
    sgst_rate: Decimal = Field(default=Decimal("0"), ge=0)
    igst_rate: Decimal = Field(default=Decimal("0"), ge=0)
    line_items: List[InvoiceLineItemCreate] = Field(..., min_length=1)
    payment_being_made_now: Decimal = Decimal("0")
    payment_method_for_new_payment: Optional[str] = None  # cash or bank

    @field_validator('invoice_number')
    def strip_invoice_number(cls, v):
        if v is None:
            return v
        return v.strip() or None


class InvoiceCreate(InvoiceWrite):
    @model_validator(mode="after")
    def invoice_number_required(self):
        # Credit notes are numbered by the server
        if self.invoice_type != InvoiceType.SALES_RETURN and not self.invoice_number:
            raise ValueError("invoice_number is required")
        return self


class InvoiceUpdate(InvoiceWrite):
    pass


class Invoice(InvoiceBase):
    id: int
    invoice_number: str
    customer_name: Optional[str] = None
    amount_before_tax: Decimal
    total_cgst_amount: Decimal
    total_sgst_amount: Decimal
    total_igst_amount: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    line_items: List[InvoiceLineItem] = []

    class Config:
        from_attributes = True


class InvoiceSummary(BaseModel):
    id: int
    invoice_number: str
    invoice_type: InvoiceType
    customer_id: int
    customer_name: Optional[str] = None
    invoice_date: date
    due_date: date
    status: InvoiceStatus
    total_amount: Decimal
    paid_amount: Decimal

    class Config:
        from_attributes = True


class NextInvoiceNumber(BaseModel):
    next_invoice_number: str
    message: Optional[str] = None
