"""
Voucher Ledger Tests
====================

Balanced vouchers are stored with their entries; anything else is rejected
before a row is written.
"""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from crud.ledgers import get_ledger_closing_balances, get_trial_balance
from crud.stock_items import get_stock_items_with_quantity
from exceptions import DuplicateNumberError, ImbalancedVoucherError, InvalidVoucherError, MissingReferenceError
from models.vouchers import Voucher, VoucherEntry, VoucherType
from schemas.vouchers import VoucherCreate, VoucherLedgerEntryCreate
from services.voucher_ledger import create_voucher, signed_inventory_quantity


def _voucher(ledgers, debit="100", credit="100", number="RV-1", voucher_type=VoucherType.RECEIPT, **extra):
    data = {
        "date": date(2025, 1, 10),
        "voucher_number": number,
        "voucher_type": voucher_type,
        "ledger_entries": [
            {"ledger_id": ledgers["cash"].id, "debit": debit},
            {"ledger_id": ledgers["sales"].id, "credit": credit},
        ],
    }
    data.update(extra)
    return VoucherCreate(**data)


class TestCreateVoucher:

    def test_balanced_voucher_is_stored(self, db, company, ledgers):
        voucher = create_voucher(db, company.id, _voucher(ledgers), "pytest_user")

        assert voucher.id is not None
        assert voucher.total_amount == Decimal("100")
        assert voucher.created_by == "pytest_user"
        assert len(voucher.entries) == 2
        assert sum(e.debit for e in voucher.entries) == sum(e.credit for e in voucher.entries)

    def test_imbalanced_voucher_writes_nothing(self, db, company, ledgers):
        with pytest.raises(ImbalancedVoucherError) as exc_info:
            create_voucher(db, company.id, _voucher(ledgers, debit="100", credit="90"), "pytest_user")

        assert exc_info.value.total_debit == Decimal("100")
        assert exc_info.value.total_credit == Decimal("90")
        assert db.query(Voucher).count() == 0
        assert db.query(VoucherEntry).count() == 0

    def test_difference_within_one_paisa_is_accepted(self, db, company, ledgers):
        voucher = create_voucher(db, company.id, _voucher(ledgers, debit="100.00", credit="99.99"), "pytest_user")

        assert voucher.id is not None

    def test_difference_above_one_paisa_is_rejected(self, db, company, ledgers):
        with pytest.raises(ImbalancedVoucherError):
            create_voucher(db, company.id, _voucher(ledgers, debit="100.00", credit="99.98"), "pytest_user")

    def test_single_entry_is_invalid(self, db, company, ledgers):
        voucher = VoucherCreate.model_construct(
            date=date(2025, 1, 10),
            voucher_number="JV-1",
            voucher_type=VoucherType.JOURNAL,
            narration=None,
            ledger_entries=[],
            inventory_entries=[],
        )

        with pytest.raises(InvalidVoucherError):
            create_voucher(db, company.id, voucher, "pytest_user")

    def test_unknown_ledger_rolls_back(self, db, company, ledgers):
        data = _voucher(ledgers)
        data.ledger_entries[1].ledger_id = 9999

        with pytest.raises(MissingReferenceError) as exc_info:
            create_voucher(db, company.id, data, "pytest_user")

        assert exc_info.value.reference_id == 9999
        assert db.query(Voucher).count() == 0

    def test_ledger_of_another_company_is_missing(self, db, company, other_company, ledgers):
        with pytest.raises(MissingReferenceError):
            create_voucher(db, other_company.id, _voucher(ledgers), "pytest_user")

    def test_duplicate_number_of_same_type(self, db, company, ledgers):
        create_voucher(db, company.id, _voucher(ledgers), "pytest_user")

        with pytest.raises(DuplicateNumberError) as exc_info:
            create_voucher(db, company.id, _voucher(ledgers), "pytest_user")

        assert exc_info.value.number == "RV-1"
        assert db.query(Voucher).count() == 1

    def test_same_number_of_other_type_is_allowed(self, db, company, ledgers):
        create_voucher(db, company.id, _voucher(ledgers), "pytest_user")
        create_voucher(db, company.id, _voucher(ledgers, voucher_type=VoucherType.JOURNAL), "pytest_user")

        assert db.query(Voucher).count() == 2


class TestSubPaisaAmounts:
    """Entry columns hold two decimals; the balance is judged on what gets stored."""

    def _constructed(self, ledgers, debits, credits):
        entries = [
            VoucherLedgerEntryCreate.model_construct(ledger_id=ledgers["cash"].id, debit=Decimal(d), credit=Decimal("0"))
            for d in debits
        ] + [
            VoucherLedgerEntryCreate.model_construct(ledger_id=ledgers["sales"].id, debit=Decimal("0"), credit=Decimal(c))
            for c in credits
        ]
        return VoucherCreate.model_construct(
            date=date(2025, 1, 10),
            voucher_number="JV-9",
            voucher_type=VoucherType.JOURNAL,
            narration=None,
            ledger_entries=entries,
            inventory_entries=[],
        )

    def test_request_with_three_decimals_is_invalid(self, ledgers):
        with pytest.raises(ValidationError):
            _voucher(ledgers, debit="0.005", credit="0.005")

    def test_many_half_paisa_debits_are_rounded_before_balancing(self, db, company, ledgers):
        voucher = self._constructed(ledgers, ["0.005"] * 10, ["0.05"])

        with pytest.raises(ImbalancedVoucherError) as exc_info:
            create_voucher(db, company.id, voucher, "pytest_user")

        assert exc_info.value.total_debit == Decimal("0.10")
        assert exc_info.value.total_credit == Decimal("0.05")
        assert db.query(Voucher).count() == 0

    def test_stored_entries_balance(self, db, company, ledgers):
        voucher = self._constructed(ledgers, ["100.004", "0.333"], ["100.337"])

        created = create_voucher(db, company.id, voucher, "pytest_user")

        debits = sum(e.debit for e in created.entries)
        credits = sum(e.credit for e in created.entries)
        assert debits == Decimal("100.33")
        assert credits == Decimal("100.34")
        assert abs(debits - credits) <= Decimal("0.01")
        assert created.total_amount == debits


class TestInventoryEntries:

    def test_sign_follows_voucher_type(self):
        assert signed_inventory_quantity(VoucherType.SALES, Decimal("5")) == Decimal("-5")
        assert signed_inventory_quantity(VoucherType.SALES, Decimal("-5")) == Decimal("-5")
        assert signed_inventory_quantity(VoucherType.PURCHASE, Decimal("5")) == Decimal("5")

    def test_sales_voucher_reduces_derived_stock(self, db, company, ledgers, stock_item):
        create_voucher(db, company.id, _voucher(
            ledgers,
            number="SV-1",
            voucher_type=VoucherType.SALES,
            inventory_entries=[{"item_id": stock_item.id, "quantity": "3", "rate": "25", "amount": "75"}],
        ), "pytest_user")
        create_voucher(db, company.id, _voucher(
            ledgers,
            number="PV-1",
            voucher_type=VoucherType.PURCHASE,
            inventory_entries=[{"item_id": stock_item.id, "quantity": "10", "rate": "20", "amount": "200"}],
        ), "pytest_user")

        items = get_stock_items_with_quantity(db, company.id)

        assert len(items) == 1
        assert items[0]["current_stock"] == Decimal("27")
        assert items[0]["unit_name"] == "pcs"

    def test_unknown_stock_item_rejected(self, db, company, ledgers):
        with pytest.raises(MissingReferenceError):
            create_voucher(db, company.id, _voucher(
                ledgers,
                voucher_type=VoucherType.SALES,
                inventory_entries=[{"item_id": 4242, "quantity": "1"}],
            ), "pytest_user")


class TestBalances:

    def test_closing_balances_include_opening_and_movements(self, db, company, ledgers):
        create_voucher(db, company.id, _voucher(ledgers, debit="250", credit="250"), "pytest_user")

        balances = {b["ledger_name"]: b for b in get_ledger_closing_balances(db, company.id, date(2025, 1, 31))}

        assert balances["Cash"]["closing_balance"] == Decimal("750")
        assert balances["Sales"]["closing_balance"] == Decimal("-250")
        assert balances["Bengaluru Wholesale"]["closing_balance"] == Decimal("0")

    def test_vouchers_after_end_date_are_ignored(self, db, company, ledgers):
        create_voucher(db, company.id, _voucher(ledgers, date=date(2025, 3, 1)), "pytest_user")

        balances = {b["ledger_name"]: b for b in get_ledger_closing_balances(db, company.id, date(2025, 1, 31))}

        assert balances["Cash"]["closing_balance"] == Decimal("500")

    def test_trial_balance_splits_debit_and_credit(self, db, company, ledgers):
        create_voucher(db, company.id, _voucher(ledgers, debit="250", credit="250"), "pytest_user")

        report = get_trial_balance(db, company.id, date(2025, 1, 31))
        rows = {r["ledger_name"]: r for r in report["report_data"]}

        assert rows["Cash"]["debit"] == Decimal("750")
        assert rows["Sales"]["credit"] == Decimal("250")
        assert report["total_debit"] - report["total_credit"] == Decimal("500")
