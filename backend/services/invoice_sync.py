"""
Keeps an invoice, its derived transactions and product stock in step.

Every invoice mutation runs in one transaction scope:

* create: compute line items, write the invoice, apply effects
* update: revert the effects recorded for the invoice, recompute from the new
  request, rewrite the invoice, apply effects again
* delete: revert effects, delete the invoice (line items cascade)

Effects are the sale (or credit note) transaction, one transaction line item per
product line recording the exact signed quantity applied to stock, and an
optional payment/refund transaction. Reverting adds the recorded quantities
back, so a delete restores stock exactly however often the invoice was edited.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from database import transaction_scope
from exceptions import DuplicateInvoiceNumberError, MissingReferenceError
from models.invoices import Invoice, InvoiceLineItem, InvoiceType
from models.products import Product
from models.transactions import Transaction, TransactionLineItem
from schemas.invoices import InvoiceBase, InvoiceCreate, InvoiceUpdate, InvoiceWrite
from services.document_numbers import reserve_credit_note_number
from services.notifications import evaluate_low_stock
from services.stock_levels import adjust_stock
from services.tax_split import split_tax
from utils.formatting import amount_to_words

logger = logging.getLogger("invoices")

ZERO = Decimal("0")
# Scale of the quantity columns on invoice and transaction line items
QUANTITY_STEP = Decimal("0.001")
INVOICE_NUMBER_CONSTRAINT = "_company_invoice_number_uc"

SALE_CATEGORY = "Sale to Customer (On Credit)"
CREDIT_NOTE_CATEGORY = "Product Return from Customer (Credit Note)"
PAYMENT_CATEGORIES = {
    ("cash", True): "Payment Received from Customer (Cash)",
    ("cash", False): "Product Return from Customer (Refund via Cash)",
    ("bank", True): "Payment Received from Customer (Bank)",
    ("bank", False): "Product Return from Customer (Refund via Bank)",
}


def _field(item, name, default=None):
    if isinstance(item, dict):
        value = item.get(name, default)
    else:
        value = getattr(item, name, default)
    return default if value is None else value


def _decimal(value) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def is_tax_context(invoice_type: InvoiceType, cgst_rate: Decimal, sgst_rate: Decimal, igst_rate: Decimal) -> bool:
    """Tax invoices are always taxed; credit notes only when a rate was given."""
    if invoice_type == InvoiceType.TAX_INVOICE:
        return True
    if invoice_type == InvoiceType.SALES_RETURN:
        return any(rate > 0 for rate in (cgst_rate, sgst_rate, igst_rate))
    return False


def compute_line_items(
    raw_items: Iterable,
    invoice_type: InvoiceType,
    cgst_rate,
    sgst_rate,
    igst_rate,
    seller_state: Optional[str],
    buyer_state: Optional[str],
    returns_adjustment=ZERO,
) -> Tuple[List[dict], dict]:
    """Pure computation of line values and invoice totals.

    Quantities are rounded to the stored scale and signed (negative on credit
    notes) before anything is derived from them, so stock moves by exactly the
    quantity that is recorded and later reverted, and a credit note yields
    negative taxable values, taxes and total.
    """
    cgst_rate, sgst_rate, igst_rate = _decimal(cgst_rate), _decimal(sgst_rate), _decimal(igst_rate)
    is_return = invoice_type == InvoiceType.SALES_RETURN
    taxed = is_tax_context(invoice_type, cgst_rate, sgst_rate, igst_rate)

    processed = []
    amount_before_tax = total_cgst = total_sgst = total_igst = ZERO
    for item in raw_items:
        quantity = abs(_decimal(_field(item, "quantity"))).quantize(QUANTITY_STEP, rounding=ROUND_HALF_UP)
        signed_quantity = -quantity if is_return else quantity
        unit_price = _decimal(_field(item, "unit_price"))
        discount_amount = _decimal(_field(item, "discount_amount"))
        taxable_value = signed_quantity * unit_price - discount_amount

        tax = split_tax(taxable_value, cgst_rate, sgst_rate, igst_rate, seller_state, buyer_state, taxed)

        amount_before_tax += taxable_value
        total_cgst += tax.cgst
        total_sgst += tax.sgst
        total_igst += tax.igst

        processed.append({
            "product_id": _field(item, "product_id"),
            "description": _field(item, "description", ""),
            "hsn_acs_code": _field(item, "hsn_acs_code"),
            "unit_of_measure": _field(item, "unit_of_measure"),
            "quantity": signed_quantity,
            "unit_price": unit_price,
            "discount_amount": discount_amount,
            "taxable_value": taxable_value,
            "cgst_rate": cgst_rate,
            "cgst_amount": tax.cgst,
            "sgst_rate": sgst_rate,
            "sgst_amount": tax.sgst,
            "igst_rate": igst_rate,
            "igst_amount": tax.igst,
            "line_total": taxable_value + tax.total,
        })

    returns_adjustment = _decimal(returns_adjustment)
    totals = {
        "amount_before_tax": amount_before_tax,
        "total_cgst_amount": total_cgst,
        "total_sgst_amount": total_sgst,
        "total_igst_amount": total_igst,
        "party_bill_returns_amount": returns_adjustment,
        "total_amount": amount_before_tax + total_cgst + total_sgst + total_igst - returns_adjustment,
    }
    return processed, totals


def payment_category(payment_method: str, payment_amount: Decimal) -> str:
    method = "cash" if payment_method.strip().lower() == "cash" else "bank"
    return PAYMENT_CATEGORIES[(method, payment_amount > 0)]


def apply_effects(db: Session, invoice: Invoice, processed: List[dict], payment_amount=ZERO, payment_method: Optional[str] = None) -> List[Transaction]:
    """Write the derived transactions and stock movements for ``invoice``. Does not commit."""
    company_id = invoice.company_id
    is_return = invoice.invoice_type == InvoiceType.SALES_RETURN
    total_amount = _decimal(invoice.total_amount)
    created = []

    if total_amount != 0:
        sale_tx = Transaction(
            company_id=company_id,
            customer_id=invoice.customer_id,
            amount=total_amount,
            description=f"Credit Note for {invoice.invoice_number}" if is_return else f"Invoice {invoice.invoice_number}",
            category=CREDIT_NOTE_CATEGORY if is_return else SALE_CATEGORY,
            date=invoice.invoice_date,
            related_invoice_id=invoice.id,
            created_by=invoice.updated_by or invoice.created_by,
        )
        db.add(sale_tx)
        db.flush()
        created.append(sale_tx)

        for item in processed:
            product_id = item.get("product_id")
            if not product_id:
                continue
            adjust_stock(db, company_id, product_id, -item["quantity"])
            db.add(TransactionLineItem(
                transaction_id=sale_tx.id,
                product_id=product_id,
                quantity=item["quantity"],
                unit_sale_price=item["unit_price"],
            ))
            evaluate_low_stock(db, company_id, product_id)

    payment_amount = _decimal(payment_amount)
    if payment_amount != 0 and payment_method:
        payment_tx = Transaction(
            company_id=company_id,
            customer_id=invoice.customer_id,
            amount=-payment_amount,
            description=f"Payment/Refund for Invoice {invoice.invoice_number}",
            category=payment_category(payment_method, payment_amount),
            date=invoice.invoice_date,
            related_invoice_id=invoice.id,
            created_by=invoice.updated_by or invoice.created_by,
        )
        db.add(payment_tx)
        created.append(payment_tx)

    db.flush()
    return created


def revert_effects(db: Session, company_id: int, invoice_id: int) -> int:
    """Undo everything ``apply_effects`` recorded for the invoice. Returns the number of transactions removed."""
    transactions = db.query(Transaction).options(selectinload(Transaction.line_items)).filter(
        Transaction.related_invoice_id == invoice_id,
        Transaction.company_id == company_id,
    ).all()

    for tx in transactions:
        for line in tx.line_items:
            if line.product_id:
                adjust_stock(db, company_id, line.product_id, line.quantity)

    for tx in transactions:
        db.delete(tx)
    db.flush()
    return len(transactions)


def _require_products(db: Session, company_id: int, processed: List[dict]):
    wanted = {item["product_id"] for item in processed if item.get("product_id")}
    if not wanted:
        return
    found = {
        pid for (pid,) in db.query(Product.id).filter(Product.id.in_(wanted), Product.company_id == company_id).all()
    }
    missing = sorted(wanted - found)
    if missing:
        raise MissingReferenceError("Product", missing[0])


def _header_values(invoice: InvoiceWrite, totals: dict) -> dict:
    header = invoice.model_dump(include=set(InvoiceBase.model_fields))
    header.update(totals)
    if not header.get("amount_in_words"):
        header["amount_in_words"] = amount_to_words(totals["total_amount"])
    return header


def _line_item_rows(processed: List[dict]) -> List[InvoiceLineItem]:
    return [InvoiceLineItem(**item) for item in processed]


def is_invoice_number_collision(error: IntegrityError) -> bool:
    message = str(error.orig)
    return INVOICE_NUMBER_CONSTRAINT in message or "invoices.invoice_number" in message


def _flush_invoice_number(db: Session, number: str):
    try:
        db.flush()
    except IntegrityError as e:
        if not is_invoice_number_collision(e):
            raise
        raise DuplicateInvoiceNumberError(number)


def create_invoice(
    db: Session,
    company_id: int,
    invoice: InvoiceCreate,
    user_id: str,
    seller_state: Optional[str],
    buyer_state: Optional[str],
) -> Invoice:
    processed, totals = compute_line_items(
        invoice.line_items,
        invoice.invoice_type,
        invoice.cgst_rate,
        invoice.sgst_rate,
        invoice.igst_rate,
        seller_state,
        buyer_state,
        invoice.party_bill_returns_amount,
    )
    payment = _decimal(invoice.payment_being_made_now)

    with transaction_scope(db):
        _require_products(db, company_id, processed)

        if invoice.invoice_type == InvoiceType.SALES_RETURN:
            invoice_number = reserve_credit_note_number(db, company_id)
        else:
            invoice_number = invoice.invoice_number

        db_invoice = Invoice(
            **_header_values(invoice, totals),
            company_id=company_id,
            invoice_number=invoice_number,
            paid_amount=payment,
            created_by=user_id,
            updated_by=user_id,
        )
        db.add(db_invoice)
        _flush_invoice_number(db, invoice_number)

        db_invoice.line_items = _line_item_rows(processed)
        db.flush()

        apply_effects(db, db_invoice, processed, payment, invoice.payment_method_for_new_payment)

    db.refresh(db_invoice)
    logger.info(
        f"Invoice {db_invoice.invoice_number} created for company {company_id} by {user_id}, total {db_invoice.total_amount}"
    )
    return db_invoice


def _lock_invoice(db: Session, company_id: int, invoice_id: int) -> Optional[Invoice]:
    return db.query(Invoice).filter(
        Invoice.id == invoice_id,
        Invoice.company_id == company_id,
    ).with_for_update().populate_existing().first()


def update_invoice(
    db: Session,
    company_id: int,
    invoice_id: int,
    invoice: InvoiceUpdate,
    user_id: str,
    seller_state: Optional[str],
    buyer_state: Optional[str],
) -> Optional[Invoice]:
    """Revert, recompute and re-apply. Returns None when the invoice does not exist in the company."""
    processed, totals = compute_line_items(
        invoice.line_items,
        invoice.invoice_type,
        invoice.cgst_rate,
        invoice.sgst_rate,
        invoice.igst_rate,
        seller_state,
        buyer_state,
        invoice.party_bill_returns_amount,
    )
    payment = _decimal(invoice.payment_being_made_now)

    with transaction_scope(db):
        db_invoice = _lock_invoice(db, company_id, invoice_id)
        if db_invoice is None:
            return None

        _require_products(db, company_id, processed)
        reverted = revert_effects(db, company_id, invoice_id)

        for key, value in _header_values(invoice, totals).items():
            setattr(db_invoice, key, value)
        invoice_number = invoice.invoice_number or db_invoice.invoice_number
        db_invoice.invoice_number = invoice_number
        db_invoice.paid_amount = _decimal(db_invoice.paid_amount) + payment
        db_invoice.updated_by = user_id
        _flush_invoice_number(db, invoice_number)

        db_invoice.line_items = _line_item_rows(processed)
        db.flush()

        apply_effects(db, db_invoice, processed, payment, invoice.payment_method_for_new_payment)

    db.refresh(db_invoice)
    logger.info(
        f"Invoice {db_invoice.invoice_number} updated for company {company_id} by {user_id}; "
        f"{reverted} derived transaction(s) regenerated, total {db_invoice.total_amount}"
    )
    return db_invoice


def delete_invoice(db: Session, company_id: int, invoice_id: int, user_id: str) -> bool:
    with transaction_scope(db):
        db_invoice = _lock_invoice(db, company_id, invoice_id)
        if db_invoice is None:
            return False

        invoice_number = db_invoice.invoice_number
        revert_effects(db, company_id, invoice_id)
        db.delete(db_invoice)
        db.flush()

    logger.info(f"Invoice {invoice_number} deleted for company {company_id} by {user_id}")
    return True
