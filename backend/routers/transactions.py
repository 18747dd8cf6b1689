from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from database import get_db
from crud import transactions as crud_transactions
from schemas.transactions import Transaction as TransactionSchema
from utils.auth_utils import get_current_user
from utils.tenancy import get_company_id

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.get("/", response_model=List[TransactionSchema])
def read_transactions(
    invoice_id: Optional[int] = None,
    customer_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
    company_id: int = Depends(get_company_id)
):
    return crud_transactions.get_transactions(
        db, company_id, invoice_id=invoice_id, customer_id=customer_id, skip=skip, limit=limit
    )
