from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List
from datetime import date
import logging

from database import get_db
from crud import ledgers as crud_ledgers
from crud import vouchers as crud_vouchers
from crud.invoices import get_company
from schemas.vouchers import GstCalculationDetails, Voucher as VoucherSchema, VoucherCreate
from services.tax_split import is_intra_state
from services.voucher_ledger import create_voucher as post_voucher
from utils.auth_utils import get_current_user, get_user_identifier
from utils.tenancy import get_company_id

router = APIRouter(prefix="/vouchers", tags=["Vouchers"])
logger = logging.getLogger("vouchers")


@router.post("/", response_model=VoucherSchema, status_code=status.HTTP_201_CREATED)
def create_voucher(
    voucher: VoucherCreate,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    """Create a balanced voucher with its ledger lines and optional stock lines."""
    db_voucher = post_voucher(db, company_id, voucher, get_user_identifier(user))
    return crud_vouchers.get_voucher(db, db_voucher.id, company_id)


@router.get("/daybook", response_model=List[VoucherSchema])
def read_daybook(
    on_date: date = Query(..., alias="date"),
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    return crud_vouchers.get_daybook(db, company_id, on_date)


@router.get("/gst-calculation-details", response_model=GstCalculationDetails)
def read_gst_calculation_details(
    party_ledger_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    """Whether a voucher against this party ledger is taxed as CGST+SGST or IGST."""
    company = get_company(db, company_id)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    party = crud_ledgers.get_ledger(db, party_ledger_id, company_id)
    if not party:
        raise HTTPException(status_code=404, detail="Party ledger not found")

    gst_type = "CGST_SGST" if is_intra_state(company.state, party.state) else "IGST"
    return GstCalculationDetails(company_state=company.state, party_state=party.state, gst_type=gst_type)


@router.get("/{voucher_id}", response_model=VoucherSchema)
def read_voucher(
    voucher_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    db_voucher = crud_vouchers.get_voucher(db, voucher_id, company_id)
    if db_voucher is None:
        raise HTTPException(status_code=404, detail="Voucher not found")
    return db_voucher
