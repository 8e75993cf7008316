"""
Worker deduction calculator and monthly payment sheet.

Kharchi and advances are matched to a month by prefix on the ISO date
(``"2024-01-07"`` belongs to ``"2024-01"``). Work amount and mess deduction
are entered by the operator per worker per month.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from sitebook.ledger.money import Money, SignedMoney, to_money, total
from sitebook.ledger.records import (
    AdvanceEntry,
    KharchiEntry,
    LedgerModel,
    Worker,
    WorkerPaymentRecord,
)


class NetPayable(LedgerModel):
    worker_id: str
    month: str
    work_amount: Money
    mess_deduction: Money
    kharchi_deduction: Money
    advance_deduction: Money
    net_payable: SignedMoney


def in_month(entry_date: Any, month: str) -> bool:
    if not month or entry_date is None:
        return False
    if isinstance(entry_date, (date, datetime)):
        entry_date = entry_date.isoformat()
    return str(entry_date).startswith(month)


def monthly_deduction(entries: Iterable, worker_id: str, month: str) -> Decimal:
    return total(
        e.amount for e in entries
        if e.worker_id == worker_id and in_month(e.date, month)
    )


def compute_net_payable(
    worker_id: str,
    month: str,
    work_amount: Any,
    mess_deduction: Any,
    kharchi_entries: Iterable[KharchiEntry],
    advance_entries: Iterable[AdvanceEntry],
) -> NetPayable:
    """Net amount due to a worker for a month.

    The result is not clamped: a negative net payable means the worker owes
    the company.
    """
    work = to_money(work_amount)
    mess = to_money(mess_deduction)
    kharchi = monthly_deduction(kharchi_entries, worker_id, month)
    advance = monthly_deduction(advance_entries, worker_id, month)
    return NetPayable(
        worker_id=worker_id,
        month=month,
        work_amount=work,
        mess_deduction=mess,
        kharchi_deduction=kharchi,
        advance_deduction=advance,
        net_payable=work - mess - kharchi - advance,
    )


def recompute_payment(record: WorkerPaymentRecord) -> WorkerPaymentRecord:
    """Re-derive netPayable from the stored deductions."""
    net = (record.work_amount - record.mess_deduction
           - record.kharchi_deduction - record.advance_deduction)
    return record.model_copy(update={"net_payable": net})


def build_payment_sheet(
    project_id: str,
    month: str,
    workers: Sequence[Worker],
    work_amounts: Mapping[str, Any],
    mess_deductions: Mapping[str, Any],
    kharchi_entries: Sequence[KharchiEntry],
    advance_entries: Sequence[AdvanceEntry],
    paid_at: Optional[datetime] = None,
) -> List[WorkerPaymentRecord]:
    """One payment record per worker of ``project_id`` for ``month``.

    Workers without an entered work amount or mess deduction get zero.
    Record ids are ``<worker id>-<month>`` so a re-save keeps the same id.
    """
    if paid_at is None:
        paid_at = datetime.now(timezone.utc)
    records = []
    for worker in workers:
        if worker.project_id != project_id:
            continue
        result = compute_net_payable(
            worker.id,
            month,
            work_amounts.get(worker.id, 0),
            mess_deductions.get(worker.id, 0),
            kharchi_entries,
            advance_entries,
        )
        records.append(WorkerPaymentRecord(
            id=f"{worker.id}-{month}",
            serial_no=worker.serial_no,
            worker_id=worker.id,
            project_id=project_id,
            month=month,
            work_amount=result.work_amount,
            mess_deduction=result.mess_deduction,
            kharchi_deduction=result.kharchi_deduction,
            advance_deduction=result.advance_deduction,
            net_payable=result.net_payable,
            is_paid=True,
            date=paid_at,
        ))
    return records


def save_worker_payments(
    existing: Sequence[WorkerPaymentRecord],
    batch: Sequence[WorkerPaymentRecord],
) -> List[WorkerPaymentRecord]:
    """Replace any saved record sharing (workerId, month) with the new batch.

    Last write wins; records for other workers or months are untouched.
    """
    incoming: Dict[tuple, WorkerPaymentRecord] = {}
    for record in batch:
        incoming[record.key] = recompute_payment(record)
    kept = [r for r in existing if r.key not in incoming]
    return kept + list(incoming.values())


def payments_for(records: Iterable[WorkerPaymentRecord], project_id: Optional[str] = None,
                 month: Optional[str] = None) -> List[WorkerPaymentRecord]:
    return [
        r for r in records
        if (project_id is None or r.project_id == project_id)
        and (month is None or r.month == month)
    ]
