from datetime import date

import pytest

from sitebook.ledger.execution import pour_columns, set_pour
from sitebook.ledger.records import ExecutionLevel, PourStage


def level(pours):
    return ExecutionLevel(id="e1", project_id="p1", level_name="10th Floor", pours=pours)


def test_pour_columns_has_a_floor_of_three():
    assert pour_columns([]) == 3
    assert pour_columns([level([{"date": "2025-08-28"}])]) == 3


def test_pour_columns_follows_longest_level():
    levels = [level([{}] * 2), level([{}] * 5)]
    assert pour_columns(levels) == 5


def test_set_pour_pads_sparse_list():
    updated = set_pour(level([]), 2, date=date(2025, 9, 4), cycle=13)
    assert len(updated.pours) == 3
    assert updated.pours[0] == PourStage()
    assert updated.pours[2].date == date(2025, 9, 4)
    assert updated.pours[2].cycle == 13


def test_set_pour_keeps_other_fields():
    original = level([{"date": "2025-08-28", "cycle": 20}])
    updated = set_pour(original, 0, cycle=21)
    assert updated.pours[0].date == date(2025, 8, 28)
    assert updated.pours[0].cycle == 21
    assert original.pours[0].cycle == 20


def test_blank_date_reads_as_empty():
    assert level([{"date": ""}]).pours[0].date is None


def test_negative_index_is_rejected():
    with pytest.raises(IndexError):
        set_pour(level([]), -1, cycle=1)
