import json
from datetime import date
from decimal import Decimal

import pytest

from sitebook.ledger.state import COLLECTION_KEYS, LedgerState
from sitebook.services.backup import (
    InvalidBackup,
    backup_filename,
    export_backup,
    import_backup,
    parse_backup,
)


@pytest.fixture
def state():
    return LedgerState().add("projects", {"id": "p1", "name": "Sunset"}).add(
        "bills", {"projectId": "p1", "amount": 50000, "gstRate": 18})


def test_filename():
    assert backup_filename(date(2024, 3, 9)) == "sn_enterprise_backup_2024-03-09.json"


def test_export_has_exactly_the_ten_keys(state):
    exported = export_backup(state)
    assert list(exported) == list(COLLECTION_KEYS)
    assert exported["bills"][0]["grandTotal"] == 59000
    json.dumps(exported)


def test_import_round_trip(state):
    payload = json.dumps(export_backup(state)).encode()
    restored = import_backup(LedgerState(), payload)
    assert restored.projects == state.projects
    assert restored.bills == state.bills


@pytest.mark.parametrize("payload", [
    b"{not json",
    b"\xff\xfe",
    "[]",
    json.dumps({"workers": []}),
    json.dumps({"projects": "nope"}),
])
def test_rejects_bad_files(state, payload):
    with pytest.raises(InvalidBackup):
        import_backup(state, payload)


def test_bad_record_rejects_whole_file(state):
    payload = {"projects": [], "bills": [{"amount": 10}]}
    with pytest.raises(InvalidBackup):
        import_backup(state, payload)
    assert len(state.projects) == 1


def test_imported_derived_fields_are_recomputed():
    payload = {
        "projects": [],
        "bills": [
            {"projectId": "p1", "amount": 50000, "gstRate": 18, "gstAmount": 1, "grandTotal": 2},
            {"projectId": "p1", "amount": 700, "gstRate": 0},
        ],
        "purchases": [{"projectId": "p1", "quantity": 5, "rate": 6500, "totalAmount": 1}],
        "workerPayments": [{"workerId": "w1", "projectId": "p1", "month": "2024-01",
                            "workAmount": 1000, "advanceDeduction": 300, "netPayable": 5}],
    }
    restored = import_backup(LedgerState(), payload)

    taxed, untaxed = restored.bills
    assert taxed.gst_amount == Decimal("9000.00")
    assert taxed.grand_total == taxed.amount + taxed.gst_amount
    assert untaxed.grand_total == Decimal("700.00")
    assert restored.purchases[0].total_amount == Decimal("32500.00")
    assert restored.worker_payments[0].net_payable == Decimal("700.00")


def test_parse_accepts_dict():
    assert parse_backup({"projects": []}) == {"projects": []}
