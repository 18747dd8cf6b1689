from datetime import date
from sqlalchemy.orm import Session, selectinload
from models.vouchers import Voucher, VoucherEntry


def get_voucher(db: Session, voucher_id: int, company_id: int):
    return db.query(Voucher).options(
        selectinload(Voucher.entries).selectinload(VoucherEntry.ledger),
        selectinload(Voucher.inventory_entries),
    ).filter(Voucher.id == voucher_id, Voucher.company_id == company_id).first()


def get_daybook(db: Session, company_id: int, on_date: date):
    """All vouchers of one day with their ledger lines, in the order they were entered."""
    return db.query(Voucher).options(
        selectinload(Voucher.entries).selectinload(VoucherEntry.ledger),
        selectinload(Voucher.inventory_entries),
    ).filter(
        Voucher.company_id == company_id,
        Voucher.date == on_date,
    ).order_by(Voucher.created_at.asc(), Voucher.id.asc()).all()
