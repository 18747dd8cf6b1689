"""
GST split for a single invoice line.

An intra-state supply (seller and buyer in the same state) is taxed as CGST +
SGST; anything else, including a supply where either state is unknown, is
taxed as IGST. Amounts are plain ``Decimal`` products and are not rounded here.
"""

from decimal import Decimal
from typing import NamedTuple, Optional

ZERO = Decimal("0")
HUNDRED = Decimal("100")


class TaxSplit(NamedTuple):
    cgst: Decimal
    sgst: Decimal
    igst: Decimal

    @property
    def total(self) -> Decimal:
        return self.cgst + self.sgst + self.igst


NO_TAX = TaxSplit(ZERO, ZERO, ZERO)


def _normalize_state(state: Optional[str]) -> str:
    return (state or "").strip().lower()


def is_intra_state(seller_state: Optional[str], buyer_state: Optional[str]) -> bool:
    seller = _normalize_state(seller_state)
    buyer = _normalize_state(buyer_state)
    return bool(seller) and bool(buyer) and seller == buyer


def split_tax(
    taxable_value: Decimal,
    cgst_rate: Decimal,
    sgst_rate: Decimal,
    igst_rate: Decimal,
    seller_state: Optional[str],
    buyer_state: Optional[str],
    is_tax_context: bool,
) -> TaxSplit:
    """Return the (cgst, sgst, igst) amounts for ``taxable_value``.

    At most one of the CGST/SGST pair and IGST is non-zero. Rates are
    percentages; a negative taxable value (credit note line) yields negative
    tax amounts.
    """
    if not is_tax_context:
        return NO_TAX

    taxable_value = Decimal(taxable_value)
    if is_intra_state(seller_state, buyer_state):
        return TaxSplit(
            cgst=taxable_value * Decimal(cgst_rate or 0) / HUNDRED,
            sgst=taxable_value * Decimal(sgst_rate or 0) / HUNDRED,
            igst=ZERO,
        )
    return TaxSplit(cgst=ZERO, sgst=ZERO, igst=taxable_value * Decimal(igst_rate or 0) / HUNDRED)
