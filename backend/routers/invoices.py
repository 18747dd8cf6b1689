from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Tuple, Optional
import logging

from database import get_db
from crud import invoices as crud_invoices
from exceptions import MissingReferenceError
from schemas.invoices import (
    Invoice as InvoiceSchema,
    InvoiceCreate,
    InvoiceSummary,
    InvoiceUpdate,
    InvoiceWrite,
    NextInvoiceNumber,
)
from services import invoice_sync
from services.document_numbers import suggest_invoice_number
from utils.auth_utils import get_current_user, get_user_identifier
from utils.tenancy import get_company_id

router = APIRouter(prefix="/invoices", tags=["Invoices"])
logger = logging.getLogger("invoices")


def _jurisdictions(db: Session, company_id: int, invoice: InvoiceWrite) -> Tuple[Optional[str], Optional[str]]:
    """Seller state from the company, buyer state from the place of supply or else the customer."""
    customer = crud_invoices.get_customer(db, invoice.customer_id, company_id)
    if not customer:
        raise MissingReferenceError("Customer", invoice.customer_id)
    company = crud_invoices.get_company(db, company_id)
    seller_state = company.state if company else None
    buyer_state = invoice.place_of_supply_state or customer.state
    return seller_state, buyer_state


@router.get("/", response_model=List[InvoiceSummary])
def read_invoices(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    return crud_invoices.get_invoices(db, company_id, skip=skip, limit=limit)


@router.get("/suggest-next-number", response_model=NextInvoiceNumber)
def read_next_invoice_number(
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    number, message = suggest_invoice_number(db, company_id)
    return NextInvoiceNumber(next_invoice_number=number, message=message)


@router.get("/{invoice_id}", response_model=InvoiceSchema)
def read_invoice(
    invoice_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    db_invoice = crud_invoices.get_invoice(db, invoice_id, company_id)
    if db_invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return db_invoice


@router.post("/", response_model=InvoiceSchema, status_code=status.HTTP_201_CREATED)
def create_invoice(
    invoice: InvoiceCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    """Create an invoice or credit note together with its transactions and stock movements."""
    seller_state, buyer_state = _jurisdictions(db, company_id, invoice)
    return invoice_sync.create_invoice(db, company_id, invoice, get_user_identifier(user), seller_state, buyer_state)


@router.put("/{invoice_id}", response_model=InvoiceSchema)
def update_invoice(
    invoice_id: int,
    invoice: InvoiceUpdate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    """Replace an invoice; its previous transactions and stock movements are reverted first."""
    seller_state, buyer_state = _jurisdictions(db, company_id, invoice)
    db_invoice = invoice_sync.update_invoice(
        db, company_id, invoice_id, invoice, get_user_identifier(user), seller_state, buyer_state
    )
    if db_invoice is None:
        raise HTTPException(status_code=404, detail="Invoice not found")
    return db_invoice


@router.delete("/{invoice_id}")
def delete_invoice(
    invoice_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    if not invoice_sync.delete_invoice(db, company_id, invoice_id, get_user_identifier(user)):
        raise HTTPException(status_code=404, detail="Invoice not found")
    return {"message": "Invoice and related data deleted successfully."}
