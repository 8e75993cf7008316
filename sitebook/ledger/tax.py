"""
Bill tax calculator.

GST is always derived from the base amount and the rate; the grand total is
never entered directly. Rounding: the GST amount is rounded half-up to the
paisa, and the grand total is the exact sum of two already-rounded values.
"""

from decimal import Decimal
from typing import Any

from sitebook.ledger.money import HUNDRED, Money, Quantity, quantize, to_money, to_quantity
from sitebook.ledger.records import Bill, LedgerModel


class TaxBreakdown(LedgerModel):
    amount: Money
    gst_rate: Quantity
    gst_amount: Money
    grand_total: Money


def compute_tax(base_amount: Any, gst_rate_percent: Any) -> TaxBreakdown:
    """Return GST and grand total for a base amount at a percentage rate.

    Negative or non-numeric inputs count as zero.
    """
    amount = to_money(base_amount)
    rate = to_quantity(gst_rate_percent)
    gst_amount = quantize(amount * rate / HUNDRED)
    return TaxBreakdown(
        amount=amount,
        gst_rate=rate,
        gst_amount=gst_amount,
        grand_total=amount + gst_amount,
    )


def apply_tax(bill: Bill) -> Bill:
    """Copy of ``bill`` with gstAmount and grandTotal recomputed."""
    breakdown = compute_tax(bill.amount, bill.gst_rate)
    return bill.model_copy(update={
        "gst_amount": breakdown.gst_amount,
        "grand_total": breakdown.grand_total,
    })


def billed_total(bill: Bill) -> Decimal:
    # Bills imported without a grand total count at their base amount
    if bill.grand_total is None:
        return bill.amount
    return bill.grand_total
