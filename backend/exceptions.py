"""
Typed errors raised by the ledger and invoice engine.

Every class carries a machine-readable ``code`` and the structured values a
caller needs, so routers and tests catch by type instead of parsing messages.

    LedgerEngineError
    +-- InvalidVoucherError
    +-- ImbalancedVoucherError
    +-- DuplicateNumberError
    |   +-- DuplicateInvoiceNumberError
    +-- MissingReferenceError
    +-- StorageFailure
"""

from decimal import Decimal


class LedgerEngineError(Exception):
    """Base class for all engine errors."""

    code: str = "LEDGER_ENGINE_ERROR"


class InvalidVoucherError(LedgerEngineError):
    """Voucher is structurally unusable, e.g. fewer than two ledger entries."""

    code: str = "INVALID_VOUCHER"


class ImbalancedVoucherError(LedgerEngineError):
    """Voucher debits and credits differ by more than the currency epsilon."""

    code: str = "IMBALANCED_VOUCHER"

    def __init__(self, total_debit: Decimal, total_credit: Decimal):
        self.total_debit = total_debit
        self.total_credit = total_credit
        super().__init__(
            f"Debit and Credit totals do not match! Debit: {total_debit}, Credit: {total_credit}"
        )


class DuplicateNumberError(LedgerEngineError):
    """A voucher or invoice number collides with an existing record."""

    code: str = "DUPLICATE_NUMBER"

    def __init__(self, number: str, document: str = "voucher"):
        self.number = number
        self.document = document
        super().__init__(f'A {document} with number "{number}" already exists.')


class DuplicateInvoiceNumberError(DuplicateNumberError):
    """An invoice or credit note number is already used by the company."""

    code: str = "DUPLICATE_INVOICE_NUMBER"

    def __init__(self, number: str):
        super().__init__(number, document="invoice or credit note")


class MissingReferenceError(LedgerEngineError):
    """A referenced record does not exist or belongs to another company."""

    code: str = "MISSING_REFERENCE"

    def __init__(self, entity: str, reference_id):
        self.entity = entity
        self.reference_id = reference_id
        super().__init__(f"{entity} with ID {reference_id} not found.")


class StorageFailure(LedgerEngineError):
    """The store could not complete the unit of work; everything was rolled back."""

    code: str = "STORAGE_FAILURE"
