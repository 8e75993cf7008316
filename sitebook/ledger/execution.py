"""Slab pour schedule per building level."""

from typing import Iterable, Optional

from sitebook.ledger.records import ExecutionLevel, PourStage

DEFAULT_POUR_COLUMNS = 3


def pour_columns(levels: Iterable[ExecutionLevel], minimum: int = DEFAULT_POUR_COLUMNS) -> int:
    """Number of pour columns needed to show every level of a site."""
    return max([minimum] + [len(level.pours) for level in levels])


def set_pour(level: ExecutionLevel, index: int, **fields: Optional[object]) -> ExecutionLevel:
    """Copy of ``level`` with pour ``index`` updated.

    The pours list is padded with empty stages so a later pour can be
    recorded before earlier ones.
    """
    if index < 0:
        raise IndexError("pour index must not be negative")
    pours = list(level.pours)
    while len(pours) <= index:
        pours.append(PourStage())
    current = pours[index].model_dump()
    current.update(fields)
    pours[index] = PourStage.model_validate(current)
    return level.model_copy(update={"pours": pours})
