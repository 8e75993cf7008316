"""Named transitions on the ledger aggregate."""

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from sitebook.ledger.state import (
    BILLS,
    CLIENT_PAYMENTS,
    KHARCHI,
    MESS,
    PROJECTS,
    PURCHASES,
    WORKERS,
    WORKER_PAYMENTS,
    LedgerState,
    RecordNotFound,
    UnknownCollection,
)


@pytest.fixture
def state():
    return LedgerState().add(PROJECTS, {"id": "p1", "name": "Sunset Heights"})


class TestAdd:

    def test_bill_totals_are_derived(self, state):
        state = state.add(BILLS, {"projectId": "p1", "amount": 50000, "gstRate": 18, "grandTotal": 1})
        bill = state.bills[0]
        assert bill.gst_amount == Decimal("9000.00")
        assert bill.grand_total == Decimal("59000.00")

    def test_purchase_total_is_derived(self, state):
        state = state.add(PURCHASES, {"projectId": "p1", "quantity": 50, "rate": 420})
        assert state.purchases[0].total_amount == Decimal("21000.00")

    def test_mess_entry_is_derived(self, state):
        state = state.add(MESS, {"projectId": "p1", "weekStartDate": "2025-10-05", "workerCount": 32,
                                 "rate": 750, "amountPaid": 24000, "otherExpenses": 535})
        entry = state.mess_entries[0]
        assert entry.balance == Decimal("535.00")
        assert entry.week_end_date == date(2025, 10, 11)

    def test_serial_numbers_per_project(self, state):
        state = state.add(WORKERS, {"name": "A", "projectId": "p1"})
        state = state.add(WORKERS, {"name": "B", "projectId": "p1"})
        state = state.add(WORKERS, {"name": "C", "projectId": "p2"})
        state = state.add(WORKERS, {"name": "D", "projectId": "p1", "serialNo": 10})
        assert [w.serial_no for w in state.workers] == [1, 2, 1, 10]

    def test_original_state_is_untouched(self, state):
        state.add(BILLS, {"projectId": "p1", "amount": 10})
        assert state.bills == []

    def test_kharchi_is_not_directly_editable(self, state):
        with pytest.raises(UnknownCollection):
            state.add(KHARCHI, {"workerId": "w1", "projectId": "p1", "date": "2024-01-07"})

    def test_unknown_collection(self, state):
        with pytest.raises(UnknownCollection):
            state.add("invoices", {})

    def test_invalid_record_raises(self, state):
        with pytest.raises(ValidationError):
            state.add(CLIENT_PAYMENTS, {"projectId": "p1", "amount": 10, "date": "not a date"})


class TestEditDelete:

    def test_edit_is_full_replace(self, state):
        state = state.add(BILLS, {"id": "b1", "projectId": "p1", "billNo": "INV-1",
                                  "amount": 100, "gstRate": 18})
        state = state.edit(BILLS, {"id": "b1", "projectId": "p1", "amount": 200, "gstRate": 5})
        bill = state.find(BILLS, "b1")
        assert bill.bill_no == ""
        assert bill.grand_total == Decimal("210.00")

    def test_edit_missing_record(self, state):
        with pytest.raises(RecordNotFound):
            state.edit(PROJECTS, {"id": "nope", "name": "x"})

    def test_delete(self, state):
        assert state.delete(PROJECTS, "p1").projects == []

    def test_delete_missing_record(self, state):
        with pytest.raises(RecordNotFound):
            state.delete(PROJECTS, "nope")

    def test_delete_works_on_merged_collections(self, state):
        state = state.merge_kharchi([{"id": "k1", "workerId": "w1", "projectId": "p1",
                                      "date": "2024-01-07", "amount": 500}])
        assert state.delete(KHARCHI, "k1").kharchi == []


def test_save_worker_payments_twice(state):
    record = {"workerId": "w1", "projectId": "p1", "month": "2024-01", "workAmount": 1000}
    state = state.save_worker_payments([record])
    state = state.save_worker_payments([dict(record, workAmount=1500)])
    assert len(state.worker_payments) == 1
    assert state.worker_payments[0].net_payable == Decimal("1500.00")


class TestRestore:

    def test_absent_keys_are_kept(self, state):
        restored = state.restore({"projects": [], WORKERS: [{"name": "Z", "projectId": "p9"}]})
        assert restored.projects == []
        assert restored.workers[0].name == "Z"

    def test_keeps_collections_not_in_snapshot(self, state):
        state = state.add(BILLS, {"projectId": "p1", "amount": 10})
        restored = state.restore({"projects": []})
        assert len(restored.bills) == 1

    def test_derived_fields_are_recomputed(self, state):
        restored = state.restore({BILLS: [{"projectId": "p1", "amount": 50000, "gstRate": 18,
                                           "gstAmount": 1, "grandTotal": 2}]})
        bill = restored.bills[0]
        assert bill.grand_total == bill.amount + bill.gst_amount == Decimal("59000.00")

    def test_bad_record_leaves_state_alone(self, state):
        with pytest.raises(ValidationError):
            state.restore({"projects": [], WORKER_PAYMENTS: [{"workerId": "w1", "month": "January"}]})
        assert len(state.projects) == 1


def test_snapshot_uses_collection_keys(state):
    snapshot = state.snapshot()
    assert set(snapshot) == {
        "projects", "workers", "bills", "clientPayments", "kharchi", "advances",
        "purchases", "executionData", "messEntries", "workerPayments",
    }
    assert snapshot["projects"][0]["name"] == "Sunset Heights"
