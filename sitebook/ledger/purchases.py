"""Material purchases."""

from sitebook.ledger.money import quantize
from sitebook.ledger.records import PurchaseEntry


def recompute_purchase(entry: PurchaseEntry) -> PurchaseEntry:
    """totalAmount is always quantity times rate."""
    return entry.model_copy(update={"total_amount": quantize(entry.quantity * entry.rate)})
