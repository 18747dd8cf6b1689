from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from datetime import date
import logging

from database import get_db
from crud import ledgers as crud_ledgers
from crud import stock_items as crud_stock_items
from schemas.reports import StockItemBalance, TrialBalance
from utils.auth_utils import get_current_user
from utils.tenancy import get_company_id

router = APIRouter(prefix="/reports", tags=["Reports"])
logger = logging.getLogger("reports")


@router.get("/trial-balance", response_model=TrialBalance)
def trial_balance(
    end_date: date,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    """Closing balance of every ledger up to end_date, split into debit and credit columns."""
    report = crud_ledgers.get_trial_balance(db, company_id, end_date)
    if report["total_debit"] != report["total_credit"]:
        logger.warning(
            f"Trial balance for company {company_id} as of {end_date} does not tally: "
            f"{report['total_debit']} vs {report['total_credit']}"
        )
    return report


@router.get("/stock-items", response_model=List[StockItemBalance])
def stock_items(
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    return crud_stock_items.get_stock_items_with_quantity(db, company_id)
