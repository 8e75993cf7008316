"""
Kharchi ledger: weekly cash allowances paid on Sundays.

Entries are identified by (workerId, date), not by their id, so callers can
regenerate ids freely without creating duplicates.
"""

import calendar
from datetime import date
from typing import Dict, Iterable, List, Sequence

from sitebook.ledger.deductions import in_month
from sitebook.ledger.money import Money, ZERO, total
from sitebook.ledger.records import KharchiEntry, LedgerModel, Project, Worker
from sitebook.ledger.rollup import UNKNOWN


def merge_kharchi(existing: Sequence[KharchiEntry],
                  incoming: Iterable[KharchiEntry]) -> List[KharchiEntry]:
    """Upsert ``incoming`` into ``existing`` by (workerId, date).

    A match is replaced in place, anything new is appended. An incoming
    entry with a non-positive amount is never stored; if it matches an
    existing entry, that entry is dropped (a cleared cell removes the
    record). Skipping zero entries alone would leave the stored amount in
    place, so the removal is explicit. Merging the same batch twice gives
    the same result as once.
    """
    merged: List[KharchiEntry] = list(existing)
    index: Dict[tuple, int] = {entry.key: pos for pos, entry in enumerate(merged)}
    cleared = set()

    for entry in incoming:
        if entry.amount <= ZERO:
            if entry.key in index:
                cleared.add(entry.key)
            continue
        cleared.discard(entry.key)
        pos = index.get(entry.key)
        if pos is None:
            index[entry.key] = len(merged)
            merged.append(entry)
        else:
            merged[pos] = entry

    if cleared:
        merged = [e for e in merged if e.key not in cleared]
    return merged


def sundays_in_month(month: str) -> List[date]:
    """Every Sunday of a ``YYYY-MM`` month."""
    year, month_no = (int(part) for part in month.split("-"))
    _, days = calendar.monthrange(year, month_no)
    return [
        date(year, month_no, day)
        for day in range(1, days + 1)
        if date(year, month_no, day).weekday() == calendar.SUNDAY
    ]


class KharchiRow(LedgerModel):
    worker_id: str
    name: str
    amounts: List[Money]
    total: Money


class KharchiSheet(LedgerModel):
    project_id: str
    month: str
    sundays: List[date]
    rows: List[KharchiRow]
    sunday_totals: List[Money]
    grand_total: Money


def kharchi_sheet(project_id: str, month: str, workers: Sequence[Worker],
                  kharchi: Sequence[KharchiEntry]) -> KharchiSheet:
    """Worker-by-Sunday grid for one site and month, with totals."""
    sundays = sundays_in_month(month)
    amounts = {e.key: e.amount for e in kharchi}
    rows = []
    for worker in workers:
        if worker.project_id != project_id:
            continue
        cells = [amounts.get((worker.id, sunday), ZERO) for sunday in sundays]
        rows.append(KharchiRow(
            worker_id=worker.id,
            name=worker.name or UNKNOWN,
            amounts=cells,
            total=total(cells),
        ))
    sunday_totals = [total(row.amounts[i] for row in rows) for i in range(len(sundays))]
    return KharchiSheet(
        project_id=project_id,
        month=month,
        sundays=sundays,
        rows=rows,
        sunday_totals=sunday_totals,
        grand_total=total(row.total for row in rows),
    )


class SiteKharchi(LedgerModel):
    project_id: str
    name: str
    total: Money


def site_totals(projects: Sequence[Project], kharchi: Sequence[KharchiEntry],
                month: str) -> List[SiteKharchi]:
    """Kharchi paid per site during ``month``."""
    return [
        SiteKharchi(
            project_id=project.id,
            name=project.name or UNKNOWN,
            total=total(
                e.amount for e in kharchi
                if e.project_id == project.id and in_month(e.date, month)
            ),
        )
        for project in projects
    ]
