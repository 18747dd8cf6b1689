from sqlalchemy.orm import Session, selectinload, joinedload
from models.company import Company
from models.invoices import Invoice
from models.parties import Party


def get_invoice(db: Session, invoice_id: int, company_id: int):
    return db.query(Invoice).options(
        selectinload(Invoice.line_items),
        joinedload(Invoice.customer),
    ).filter(Invoice.id == invoice_id, Invoice.company_id == company_id).first()


def get_invoices(db: Session, company_id: int, skip: int = 0, limit: int = 100):
    return db.query(Invoice).options(joinedload(Invoice.customer)).filter(
        Invoice.company_id == company_id
    ).order_by(Invoice.invoice_date.desc(), Invoice.id.desc()).offset(skip).limit(limit).all()


def get_company(db: Session, company_id: int):
    return db.query(Company).filter(Company.id == company_id).first()


def get_customer(db: Session, customer_id: int, company_id: int):
    return db.query(Party).filter(Party.id == customer_id, Party.company_id == company_id).first()
