"""Mess (site canteen) weekly accounting."""

from datetime import date, timedelta
from typing import Any, Optional

from sitebook.ledger.money import Money, SignedMoney, to_count, to_money
from sitebook.ledger.records import LedgerModel, MessEntry

WEEK_SPAN = timedelta(days=6)


class MessWeek(LedgerModel):
    total_amount: Money
    balance: SignedMoney


def compute_mess_week(worker_count: Any, rate: Any, amount_paid: Any,
                      other_expenses: Any) -> MessWeek:
    """Headcount times rate, plus extras, less what was paid.

    A positive balance is still owed to the cook; negative means overpaid.
    """
    total_amount = to_count(worker_count) * to_money(rate)
    balance = (total_amount + to_money(other_expenses)) - to_money(amount_paid)
    return MessWeek(total_amount=total_amount, balance=balance)


def week_end_for(start: date) -> date:
    return start + WEEK_SPAN


def recompute_mess_entry(entry: MessEntry, previous: Optional[MessEntry] = None) -> MessEntry:
    """Derive totalAmount, balance and, when due, weekEndDate.

    The end date is re-derived as start + 6 days when it is missing, or when
    the start date moved and the caller left the old end date in place. An
    end date edited on its own is kept.
    """
    week = compute_mess_week(entry.worker_count, entry.rate,
                             entry.amount_paid, entry.other_expenses)
    week_end = entry.week_end_date
    if week_end is None:
        week_end = week_end_for(entry.week_start_date)
    elif previous is not None and previous.week_start_date != entry.week_start_date \
            and week_end == previous.week_end_date:
        week_end = week_end_for(entry.week_start_date)
    return entry.model_copy(update={
        "total_amount": week.total_amount,
        "balance": week.balance,
        "week_end_date": week_end,
    })
