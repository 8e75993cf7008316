"""
Ledger state: the ten collections as one value.

Transitions never mutate a state in place; each returns a new
``LedgerState`` with only the touched collection replaced. Every write path
goes through :func:`normalize` so stored derived fields (grandTotal,
totalAmount, balance, netPayable) always agree with their inputs.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import Field

from sitebook.ledger.deductions import recompute_payment, save_worker_payments
from sitebook.ledger.kharchi import merge_kharchi
from sitebook.ledger.mess import recompute_mess_entry
from sitebook.ledger.purchases import recompute_purchase
from sitebook.ledger.records import (
    AdvanceEntry,
    Bill,
    ClientPayment,
    ExecutionLevel,
    KharchiEntry,
    LedgerModel,
    MessEntry,
    Project,
    PurchaseEntry,
    Worker,
    WorkerPaymentRecord,
)
from sitebook.ledger.tax import apply_tax

PROJECTS = "projects"
WORKERS = "workers"
BILLS = "bills"
CLIENT_PAYMENTS = "clientPayments"
KHARCHI = "kharchi"
ADVANCES = "advances"
PURCHASES = "purchases"
EXECUTION = "executionData"
MESS = "messEntries"
WORKER_PAYMENTS = "workerPayments"

COLLECTION_KEYS = (
    PROJECTS, WORKERS, BILLS, CLIENT_PAYMENTS, KHARCHI,
    ADVANCES, PURCHASES, EXECUTION, MESS, WORKER_PAYMENTS,
)

RECORD_TYPES = {
    PROJECTS: Project,
    WORKERS: Worker,
    BILLS: Bill,
    CLIENT_PAYMENTS: ClientPayment,
    KHARCHI: KharchiEntry,
    ADVANCES: AdvanceEntry,
    PURCHASES: PurchaseEntry,
    EXECUTION: ExecutionLevel,
    MESS: MessEntry,
    WORKER_PAYMENTS: WorkerPaymentRecord,
}

# Kharchi is written through merge_kharchi and worker payments through
# save_worker_payments; both can still be deleted by id.
EDITABLE_COLLECTIONS = (
    PROJECTS, WORKERS, BILLS, CLIENT_PAYMENTS,
    ADVANCES, PURCHASES, EXECUTION, MESS,
)

SERIAL_COLLECTIONS = (WORKERS, BILLS, PURCHASES, ADVANCES)

COLLECTION_ATTRS = {
    PROJECTS: "projects",
    WORKERS: "workers",
    BILLS: "bills",
    CLIENT_PAYMENTS: "client_payments",
    KHARCHI: "kharchi",
    ADVANCES: "advances",
    PURCHASES: "purchases",
    EXECUTION: "execution_data",
    MESS: "mess_entries",
    WORKER_PAYMENTS: "worker_payments",
}


class LedgerError(Exception):
    pass


class UnknownCollection(LedgerError):
    def __init__(self, key: str):
        super().__init__(f"Unknown collection: {key}")
        self.key = key


class RecordNotFound(LedgerError):
    def __init__(self, key: str, record_id: str):
        super().__init__(f"{key} record {record_id} not found")
        self.key = key
        self.record_id = record_id


def check_collection(key: str, allowed: Iterable[str] = COLLECTION_KEYS) -> str:
    if key not in allowed:
        raise UnknownCollection(key)
    return key


def normalize(key: str, record: LedgerModel, previous: Optional[LedgerModel] = None) -> LedgerModel:
    """Recompute the stored derived fields of ``record``."""
    if key == BILLS:
        return apply_tax(record)
    if key == PURCHASES:
        return recompute_purchase(record)
    if key == MESS:
        return recompute_mess_entry(record, previous)
    if key == WORKER_PAYMENTS:
        return recompute_payment(record)
    return record


def coerce_record(key: str, record: Union[LedgerModel, Mapping[str, Any]]) -> LedgerModel:
    record_type = RECORD_TYPES[check_collection(key)]
    if isinstance(record, record_type):
        return record
    if isinstance(record, LedgerModel):
        record = record.model_dump()
    return record_type.model_validate(record)


class LedgerState(LedgerModel):
    projects: List[Project] = Field(default_factory=list)
    workers: List[Worker] = Field(default_factory=list)
    bills: List[Bill] = Field(default_factory=list)
    client_payments: List[ClientPayment] = Field(default_factory=list)
    kharchi: List[KharchiEntry] = Field(default_factory=list)
    advances: List[AdvanceEntry] = Field(default_factory=list)
    purchases: List[PurchaseEntry] = Field(default_factory=list)
    execution_data: List[ExecutionLevel] = Field(default_factory=list)
    mess_entries: List[MessEntry] = Field(default_factory=list)
    worker_payments: List[WorkerPaymentRecord] = Field(default_factory=list)

    @staticmethod
    def attr_for(key: str) -> str:
        return COLLECTION_ATTRS[check_collection(key)]

    def collection(self, key: str) -> list:
        return getattr(self, self.attr_for(key))

    def find(self, key: str, record_id: str) -> Optional[LedgerModel]:
        for record in self.collection(key):
            if record.id == record_id:
                return record
        return None

    def replace(self, key: str, records: Iterable[LedgerModel]) -> "LedgerState":
        return self.model_copy(update={self.attr_for(key): list(records)})

    def next_serial(self, key: str, project_id: str) -> int:
        serials = [
            r.serial_no for r in self.collection(key)
            if r.project_id == project_id and r.serial_no is not None
        ]
        return max(serials, default=0) + 1

    # -- transitions -------------------------------------------------------

    def add(self, key: str, record: Union[LedgerModel, Mapping[str, Any]]) -> "LedgerState":
        check_collection(key, EDITABLE_COLLECTIONS)
        record = coerce_record(key, record)
        if key in SERIAL_COLLECTIONS and record.serial_no is None:
            record = record.model_copy(update={"serial_no": self.next_serial(key, record.project_id)})
        record = normalize(key, record)
        return self.replace(key, self.collection(key) + [record])

    def edit(self, key: str, record: Union[LedgerModel, Mapping[str, Any]]) -> "LedgerState":
        """Full replace of the record with the same id."""
        check_collection(key, EDITABLE_COLLECTIONS)
        record = coerce_record(key, record)
        previous = self.find(key, record.id)
        if previous is None:
            raise RecordNotFound(key, record.id)
        record = normalize(key, record, previous)
        return self.replace(key, [record if r.id == record.id else r for r in self.collection(key)])

    def delete(self, key: str, record_id: str) -> "LedgerState":
        if self.find(key, record_id) is None:
            raise RecordNotFound(key, record_id)
        return self.replace(key, [r for r in self.collection(key) if r.id != record_id])

    def merge_kharchi(self, incoming: Iterable[Union[KharchiEntry, Mapping[str, Any]]]) -> "LedgerState":
        entries = [coerce_record(KHARCHI, e) for e in incoming]
        return self.replace(KHARCHI, merge_kharchi(self.kharchi, entries))

    def save_worker_payments(self, batch: Iterable[Union[WorkerPaymentRecord, Mapping[str, Any]]]) -> "LedgerState":
        records = [coerce_record(WORKER_PAYMENTS, r) for r in batch]
        return self.replace(WORKER_PAYMENTS, save_worker_payments(self.worker_payments, records))

    def restore(self, snapshot: Mapping[str, Any]) -> "LedgerState":
        """Take every collection present in ``snapshot``; keep the rest.

        Validation happens before anything is replaced, so a bad record
        leaves this state untouched. Derived fields are recomputed like on
        any other write.
        """
        incoming = LedgerState.model_validate({k: v for k, v in snapshot.items() if k in COLLECTION_KEYS})
        update = {
            self.attr_for(key): [normalize(key, record) for record in incoming.collection(key)]
            for key in COLLECTION_KEYS if key in snapshot
        }
        return self.model_copy(update=update)

    def snapshot(self) -> Dict[str, list]:
        return self.to_json()
