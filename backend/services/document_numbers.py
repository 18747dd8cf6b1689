"""
Invoice and credit note numbering.

Credit notes are numbered ``CN-YYYYMM-NNNN`` from a locked per-company,
per-prefix counter row (``document_sequences``). The counter is incremented in
the caller's transaction, so a rolled-back invoice hands its number back and
two concurrent credit notes never draw the same one.
"""

import logging
import re
from datetime import date, datetime
from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.audit_mixin import IST
from models.document_sequences import DocumentSequence
from models.invoices import Invoice, InvoiceType

logger = logging.getLogger("document_numbers")

NUMERIC_SUFFIX = re.compile(r"^(.*?)(\d+)$")
CREDIT_NOTE_WIDTH = 4
DEFAULT_FIRST_INVOICE_NUMBER = "INV-00001"


def next_number(prefix: str, latest_number: Optional[str], seed_width: int = CREDIT_NOTE_WIDTH) -> str:
    """Number that follows ``latest_number``.

    No latest number gives the seed (``prefix`` + 1 padded to ``seed_width``).
    A numeric suffix is incremented and re-padded to its previous width. A
    number without a numeric suffix gets ``-1`` appended.
    """
    if not latest_number:
        return f"{prefix}{str(1).zfill(seed_width)}"

    match = NUMERIC_SUFFIX.match(latest_number)
    if not match:
        return f"{latest_number}-1"

    head, digits = match.groups()
    return f"{head}{str(int(digits) + 1).zfill(len(digits))}"


def credit_note_prefix(on_date=None) -> str:
    if on_date is None:
        on_date = datetime.now(IST)
    elif isinstance(on_date, datetime):
        on_date = on_date.astimezone(IST) if on_date.tzinfo else on_date
    return f"CN-{on_date.year}{on_date.month:02d}-"


def _highest_issued_value(db: Session, company_id: int, prefix: str) -> int:
    """Largest numeric suffix among the company's invoice numbers that start with ``prefix``."""
    numbers = db.query(Invoice.invoice_number).filter(
        Invoice.company_id == company_id,
        Invoice.invoice_number.like(f"{prefix}%"),
    ).all()
    return max((_issued_value(prefix, number) for (number,) in numbers), default=0)


def _issued_value(prefix: str, number: Optional[str]) -> int:
    if not number or not number.startswith(prefix):
        return 0
    suffix = number[len(prefix):]
    return int(suffix) if suffix.isdigit() else 0


def _lock_sequence(db: Session, company_id: int, prefix: str) -> Optional[DocumentSequence]:
    return db.execute(
        select(DocumentSequence)
        .where(DocumentSequence.company_id == company_id, DocumentSequence.prefix == prefix)
        .with_for_update()
        .execution_options(populate_existing=True)
    ).scalar_one_or_none()


def reserve_number(db: Session, company_id: int, prefix: str, width: int = CREDIT_NOTE_WIDTH) -> str:
    """Draw the next number for ``prefix`` inside the caller's transaction.

    Does not commit. The counter row stays locked until the caller's
    transaction ends.
    """
    issued = _highest_issued_value(db, company_id, prefix)

    sequence = _lock_sequence(db, company_id, prefix)
    if sequence is None:
        # First number for this prefix; a concurrent creator wins the insert and we lock its row instead
        savepoint = db.begin_nested()
        try:
            sequence = DocumentSequence(company_id=company_id, prefix=prefix, last_value=issued, width=width)
            db.add(sequence)
            db.flush()
            savepoint.commit()
        except IntegrityError:
            savepoint.rollback()
            logger.info(f"Sequence {prefix} for company {company_id} created concurrently, retrying lock")
            sequence = _lock_sequence(db, company_id, prefix)
            if sequence is None:
                raise

    # Numbers typed in by hand with this prefix are never re-issued
    sequence.last_value = max(sequence.last_value or 0, issued) + 1
    db.flush()

    number = f"{prefix}{str(sequence.last_value).zfill(sequence.width or width)}"
    logger.info(f"Reserved document number {number} for company {company_id}")
    return number


def reserve_credit_note_number(db: Session, company_id: int, on_date: Optional[date] = None) -> str:
    return reserve_number(db, company_id, credit_note_prefix(on_date))


def suggest_invoice_number(db: Session, company_id: int) -> Tuple[str, Optional[str]]:
    """Suggest the number after the company's latest non-return invoice.

    Returns ``(number, message)``; the message is set when there was nothing to
    follow or the latest number had no numeric suffix.
    """
    latest = db.query(Invoice.invoice_number).filter(
        Invoice.company_id == company_id,
        Invoice.invoice_type != InvoiceType.SALES_RETURN,
    ).order_by(Invoice.id.desc()).limit(1).scalar()

    if not latest:
        return DEFAULT_FIRST_INVOICE_NUMBER, "No previous invoices. Suggested first number."

    suggestion = next_number("", latest)
    if not NUMERIC_SUFFIX.match(latest):
        return suggestion, f"Could not automatically determine next number from pattern: '{latest}'. Fallback suggested."
    return suggestion, None
