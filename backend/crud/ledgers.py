from datetime import date
from decimal import Decimal
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from exceptions import MissingReferenceError
from models.ledgers import Ledger, LedgerGroup
from models.vouchers import Voucher, VoucherEntry
from schemas.ledgers import LedgerCreate, LedgerGroupCreate, LedgerGroupUpdate
from utils.auth_utils import get_user_identifier


def _to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def get_ledger_group(db: Session, group_id: int, company_id: int):
    return db.query(LedgerGroup).filter(LedgerGroup.id == group_id, LedgerGroup.company_id == company_id).first()


def get_ledger_group_tree(db: Session, company_id: int) -> List[dict]:
    """Fold the flat group list into parent/children nodes; orphans become roots."""
    groups = db.query(LedgerGroup).filter(LedgerGroup.company_id == company_id).order_by(LedgerGroup.name).all()

    nodes = {
        g.id: {"id": g.id, "name": g.name, "parent_id": g.parent_id, "nature": g.nature, "children": []}
        for g in groups
    }
    tree = []
    for g in groups:
        if g.parent_id and g.parent_id in nodes:
            nodes[g.parent_id]["children"].append(nodes[g.id])
        else:
            tree.append(nodes[g.id])
    return tree


def create_ledger_group(db: Session, group: LedgerGroupCreate, company_id: int, user: dict):
    if group.parent_id is not None and not get_ledger_group(db, group.parent_id, company_id):
        raise MissingReferenceError("Ledger group", group.parent_id)

    user_identifier = get_user_identifier(user)
    db_group = LedgerGroup(
        **group.model_dump(),
        company_id=company_id,
        created_by=user_identifier,
        updated_by=user_identifier,
    )
    db.add(db_group)
    db.commit()
    db.refresh(db_group)
    return db_group


def _would_create_cycle(db: Session, group_id: int, new_parent_id: int, company_id: int) -> bool:
    parent_by_id = dict(
        db.query(LedgerGroup.id, LedgerGroup.parent_id).filter(LedgerGroup.company_id == company_id).all()
    )
    current = new_parent_id
    seen = set()
    while current is not None and current not in seen:
        if current == group_id:
            return True
        seen.add(current)
        current = parent_by_id.get(current)
    return False


def update_ledger_group(db: Session, group_id: int, group: LedgerGroupUpdate, company_id: int, user: dict):
    """Rename or re-parent a group. Raises ValueError when the new parent is the group itself or one of its descendants."""
    db_group = get_ledger_group(db, group_id, company_id)
    if not db_group:
        return None

    update_data = group.model_dump(exclude_unset=True)
    new_parent_id = update_data.get("parent_id")
    if new_parent_id is not None:
        if not get_ledger_group(db, new_parent_id, company_id):
            raise MissingReferenceError("Ledger group", new_parent_id)
        if _would_create_cycle(db, group_id, new_parent_id, company_id):
            raise ValueError("A ledger group cannot be moved under itself or one of its sub-groups.")

    for key, value in update_data.items():
        setattr(db_group, key, value)
    db_group.updated_by = get_user_identifier(user)
    db.commit()
    db.refresh(db_group)
    return db_group


def get_ledger(db: Session, ledger_id: int, company_id: int):
    return db.query(Ledger).filter(Ledger.id == ledger_id, Ledger.company_id == company_id).first()


def get_ledgers(db: Session, company_id: int):
    return db.query(Ledger).options(joinedload(Ledger.group)).filter(
        Ledger.company_id == company_id
    ).order_by(Ledger.name).all()


def create_ledger(db: Session, ledger: LedgerCreate, company_id: int, user: dict):
    if not get_ledger_group(db, ledger.group_id, company_id):
        raise MissingReferenceError("Ledger group", ledger.group_id)

    user_identifier = get_user_identifier(user)
    db_ledger = Ledger(
        **ledger.model_dump(),
        company_id=company_id,
        created_by=user_identifier,
        updated_by=user_identifier,
    )
    db.add(db_ledger)
    db.commit()
    db.refresh(db_ledger)
    return db_ledger


def get_ledger_closing_balances(db: Session, company_id: int, end_date: date) -> List[dict]:
    """Closing balance of every ledger as of ``end_date`` (debit positive).

    opening (signed by is_dr) + sum(debit) - sum(credit) over vouchers dated on or before end_date.
    """
    movements = db.query(
        VoucherEntry.ledger_id.label("ledger_id"),
        func.coalesce(func.sum(VoucherEntry.debit), 0).label("total_debit"),
        func.coalesce(func.sum(VoucherEntry.credit), 0).label("total_credit"),
    ).join(Voucher, VoucherEntry.voucher_id == Voucher.id).filter(
        Voucher.company_id == company_id,
        Voucher.date <= end_date,
    ).group_by(VoucherEntry.ledger_id).subquery()

    rows = db.query(
        Ledger.id,
        Ledger.name,
        Ledger.opening_balance,
        Ledger.is_dr,
        LedgerGroup.id,
        LedgerGroup.name,
        LedgerGroup.nature,
        movements.c.total_debit,
        movements.c.total_credit,
    ).join(LedgerGroup, Ledger.group_id == LedgerGroup.id).outerjoin(
        movements, movements.c.ledger_id == Ledger.id
    ).filter(Ledger.company_id == company_id).order_by(LedgerGroup.name, Ledger.name).all()

    balances = []
    for (ledger_id, ledger_name, opening_balance, is_dr, group_id, group_name, nature,
         total_debit, total_credit) in rows:
        opening = _to_decimal(opening_balance) * (1 if is_dr else -1)
        total_debit = _to_decimal(total_debit)
        total_credit = _to_decimal(total_credit)
        balances.append({
            "ledger_id": ledger_id,
            "ledger_name": ledger_name,
            "group_id": group_id,
            "group_name": group_name,
            "nature": nature,
            "opening_balance": opening,
            "total_debit": total_debit,
            "total_credit": total_credit,
            "closing_balance": opening + total_debit - total_credit,
        })
    return balances


def get_trial_balance(db: Session, company_id: int, end_date: date) -> dict:
    report_data = []
    total_debit = Decimal("0")
    total_credit = Decimal("0")
    for item in get_ledger_closing_balances(db, company_id, end_date):
        closing = item["closing_balance"]
        debit = closing if closing > 0 else Decimal("0")
        credit = -closing if closing < 0 else Decimal("0")
        total_debit += debit
        total_credit += credit
        report_data.append({
            "ledger_id": item["ledger_id"],
            "ledger_name": item["ledger_name"],
            "group_name": item["group_name"],
            "debit": debit,
            "credit": credit,
        })
    return {
        "end_date": end_date,
        "report_data": report_data,
        "total_debit": total_debit,
        "total_credit": total_credit,
    }
