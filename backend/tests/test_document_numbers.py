"""
Document Numbering Tests
========================

Pure next-number rules, credit note prefixes and the locked counter.
"""

from datetime import date, datetime
from decimal import Decimal

import pytz

from models.document_sequences import DocumentSequence
from models.invoices import Invoice, InvoiceType
from services.document_numbers import (
    credit_note_prefix,
    next_number,
    reserve_number,
    suggest_invoice_number,
)


def _add_invoice(db, company, customer, number, invoice_type=InvoiceType.TAX_INVOICE):
    db.add(Invoice(
        company_id=company.id,
        customer_id=customer.id,
        invoice_number=number,
        invoice_type=invoice_type,
        invoice_date=date(2025, 1, 10),
        due_date=date(2025, 2, 10),
    ))
    db.commit()


class TestNextNumber:

    def test_seed_when_nothing_was_issued(self):
        assert next_number("CN-202501-", None) == "CN-202501-0001"

    def test_increments_and_keeps_width(self):
        assert next_number("CN-202501-", "CN-202501-0007") == "CN-202501-0008"
        assert next_number("", "INV-00099") == "INV-00100"

    def test_width_grows_past_all_nines(self):
        assert next_number("", "A-99") == "A-100"

    def test_no_numeric_suffix_appends_dash_one(self):
        assert next_number("", "SPECIAL") == "SPECIAL-1"


class TestCreditNotePrefix:

    def test_prefix_from_date(self):
        assert credit_note_prefix(date(2025, 1, 31)) == "CN-202501-"

    def test_aware_datetime_uses_indian_calendar(self):
        # 20:00 UTC on 31 Jan is already 1 Feb in Asia/Kolkata
        moment = datetime(2025, 1, 31, 20, 0, tzinfo=pytz.utc)
        assert credit_note_prefix(moment) == "CN-202502-"


class TestReserveNumber:

    def test_first_number_for_prefix(self, db, company):
        number = reserve_number(db, company.id, "CN-202501-")
        db.commit()

        assert number == "CN-202501-0001"
        sequence = db.query(DocumentSequence).filter_by(company_id=company.id, prefix="CN-202501-").one()
        assert sequence.last_value == 1

    def test_consecutive_numbers(self, db, company):
        numbers = [reserve_number(db, company.id, "CN-202501-") for _ in range(3)]
        db.commit()

        assert numbers == ["CN-202501-0001", "CN-202501-0002", "CN-202501-0003"]

    def test_seeded_from_existing_credit_notes(self, db, company, local_customer):
        _add_invoice(db, company, local_customer, "CN-202501-0007", InvoiceType.SALES_RETURN)

        assert reserve_number(db, company.id, "CN-202501-") == "CN-202501-0008"

    def test_seeded_from_highest_suffix_not_latest_row(self, db, company, local_customer):
        _add_invoice(db, company, local_customer, "CN-202501-0003", InvoiceType.SALES_RETURN)
        _add_invoice(db, company, local_customer, "CN-202501-X", InvoiceType.SALES_RETURN)
        _add_invoice(db, company, local_customer, "CN-202501-0002", InvoiceType.SALES_RETURN)

        assert reserve_number(db, company.id, "CN-202501-") == "CN-202501-0004"

    def test_counters_are_per_company(self, db, company, other_company):
        reserve_number(db, company.id, "CN-202501-")
        reserve_number(db, company.id, "CN-202501-")

        assert reserve_number(db, other_company.id, "CN-202501-") == "CN-202501-0001"

    def test_rolled_back_number_is_handed_out_again(self, db, company):
        reserve_number(db, company.id, "CN-202501-")
        db.commit()
        reserve_number(db, company.id, "CN-202501-")
        db.rollback()

        assert reserve_number(db, company.id, "CN-202501-") == "CN-202501-0002"


class TestSuggestInvoiceNumber:

    def test_first_invoice(self, db, company):
        number, message = suggest_invoice_number(db, company.id)

        assert number == "INV-00001"
        assert message is not None

    def test_follows_latest_invoice_not_credit_notes(self, db, company, local_customer):
        _add_invoice(db, company, local_customer, "INV-00041")
        _add_invoice(db, company, local_customer, "CN-202501-0001", InvoiceType.SALES_RETURN)

        number, message = suggest_invoice_number(db, company.id)

        assert number == "INV-00042"
        assert message is None

    def test_latest_by_creation_order(self, db, company, local_customer):
        _add_invoice(db, company, local_customer, "INV-00900")
        _add_invoice(db, company, local_customer, "INV-00100")

        assert suggest_invoice_number(db, company.id)[0] == "INV-00101"

    def test_fallback_for_non_numeric_number(self, db, company, local_customer):
        _add_invoice(db, company, local_customer, "OPENING")

        number, message = suggest_invoice_number(db, company.id)

        assert number == "OPENING-1"
        assert "Fallback" in message
