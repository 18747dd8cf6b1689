"""
Manual double-entry vouchers.

A voucher is accepted only when its debit and credit totals agree to within
one paisa. Balances are never cached: ledger and stock item quantities are
aggregated from the entry rows when a report asks for them.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Set

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import transaction_scope
from exceptions import DuplicateNumberError, ImbalancedVoucherError, InvalidVoucherError, MissingReferenceError
from models.ledgers import Ledger
from models.stock_items import StockItem, StockWarehouse
from models.vouchers import Voucher, VoucherEntry, VoucherInventoryEntry, OUTWARD_VOUCHER_TYPES
from schemas.vouchers import VoucherCreate

logger = logging.getLogger("vouchers")

BALANCE_TOLERANCE = Decimal("0.01")
PAISA = Decimal("0.01")
VOUCHER_NUMBER_CONSTRAINT = "_company_voucher_number_type_uc"


def _require_ids(db: Session, model, ids: Iterable[int], company_id: int, entity: str):
    wanted: Set[int] = {i for i in ids if i is not None}
    if not wanted:
        return
    found = {
        row_id for (row_id,) in db.query(model.id).filter(model.id.in_(wanted), model.company_id == company_id).all()
    }
    missing = sorted(wanted - found)
    if missing:
        raise MissingReferenceError(entity, missing[0])


def to_paisa(amount) -> Decimal:
    """Round to the precision the entry columns store, so the balance is checked on stored values."""
    return Decimal(str(amount or 0)).quantize(PAISA, rounding=ROUND_HALF_UP)


def is_voucher_number_collision(error: IntegrityError) -> bool:
    message = str(error.orig)
    return VOUCHER_NUMBER_CONSTRAINT in message or "vouchers.voucher_number" in message


def signed_inventory_quantity(voucher_type, quantity: Decimal) -> Decimal:
    """Outward vouchers (sales) take stock out; everything else brings it in."""
    quantity = abs(Decimal(quantity))
    return -quantity if voucher_type in OUTWARD_VOUCHER_TYPES else quantity


def create_voucher(db: Session, company_id: int, voucher: VoucherCreate, user_id: str) -> Voucher:
    entries = voucher.ledger_entries
    if len(entries) < 2:
        raise InvalidVoucherError("At least two ledger entries are required.")

    amounts = [(to_paisa(e.debit), to_paisa(e.credit)) for e in entries]
    total_debit = sum((debit for debit, _ in amounts), Decimal("0"))
    total_credit = sum((credit for _, credit in amounts), Decimal("0"))
    if abs(total_debit - total_credit) > BALANCE_TOLERANCE:
        logger.warning(
            f"Rejected voucher {voucher.voucher_number} for company {company_id}: "
            f"debit {total_debit} != credit {total_credit}"
        )
        raise ImbalancedVoucherError(total_debit, total_credit)

    with transaction_scope(db):
        _require_ids(db, Ledger, (e.ledger_id for e in entries), company_id, "Ledger")
        _require_ids(db, StockItem, (i.item_id for i in voucher.inventory_entries), company_id, "Stock item")
        _require_ids(db, StockWarehouse, (i.warehouse_id for i in voucher.inventory_entries), company_id, "Warehouse")

        db_voucher = Voucher(
            company_id=company_id,
            date=voucher.date,
            voucher_number=voucher.voucher_number,
            voucher_type=voucher.voucher_type,
            narration=voucher.narration,
            total_amount=total_debit,
            created_by=user_id,
        )
        db.add(db_voucher)
        try:
            db.flush()
        except IntegrityError as e:
            if not is_voucher_number_collision(e):
                raise
            raise DuplicateNumberError(voucher.voucher_number)

        for entry, (debit, credit) in zip(entries, amounts):
            db.add(VoucherEntry(
                voucher_id=db_voucher.id,
                ledger_id=entry.ledger_id,
                debit=debit,
                credit=credit,
            ))

        for item in voucher.inventory_entries:
            db.add(VoucherInventoryEntry(
                voucher_id=db_voucher.id,
                item_id=item.item_id,
                warehouse_id=item.warehouse_id,
                quantity=signed_inventory_quantity(voucher.voucher_type, item.quantity),
                rate=item.rate,
                amount=item.amount,
            ))

    db.refresh(db_voucher)
    logger.info(
        f"Voucher {db_voucher.voucher_number} ({db_voucher.voucher_type.value}) created for company {company_id} "
        f"by {user_id}, total {total_debit}"
    )
    return db_voucher
