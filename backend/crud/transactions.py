from typing import Optional
from sqlalchemy.orm import Session, selectinload
from models.transactions import Transaction


def get_transactions(
    db: Session,
    company_id: int,
    invoice_id: Optional[int] = None,
    customer_id: Optional[int] = None,
    skip: int = 0,
    limit: int = 100,
):
    query = db.query(Transaction).options(
        selectinload(Transaction.line_items),
        selectinload(Transaction.related_invoice),
    ).filter(Transaction.company_id == company_id)
    if invoice_id is not None:
        query = query.filter(Transaction.related_invoice_id == invoice_id)
    if customer_id is not None:
        query = query.filter(Transaction.customer_id == customer_id)
    return query.order_by(Transaction.date.desc(), Transaction.id.desc()).offset(skip).limit(limit).all()
