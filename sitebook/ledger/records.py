"""
Record types for the ten ledger collections.

Records are pydantic models so they validate and coerce on the way in from
HTTP bodies and backup files, and dump back to the camelCase JSON the
dashboard has always exchanged (``projectId``, ``grandTotal`` ...).
"""

import enum
import uuid
from datetime import date, datetime
from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from sitebook.ledger.money import Count, Money, Percentage, Quantity, SignedMoney

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"


def new_id() -> str:
    return uuid.uuid4().hex


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalDate = Annotated[Optional[date], BeforeValidator(_blank_to_none)]
OptionalInt = Annotated[Optional[int], BeforeValidator(_blank_to_none)]
Month = Annotated[str, Field(pattern=MONTH_PATTERN)]
# Bills saved without a month keep an empty key
BillingMonth = Annotated[str, Field(pattern=r"^(\d{4}-(0[1-9]|1[0-2]))?$")]


class LedgerModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
        validate_default=True,
    )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class ProjectStatus(str, enum.Enum):
    PLANNING = "Planning"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"


class Project(LedgerModel):
    id: str = Field(default_factory=new_id)
    name: str = ""
    start_date: OptionalDate = None
    completion_date: OptionalDate = None
    address: str = ""
    budget: Money = 0
    status: ProjectStatus = ProjectStatus.PLANNING
    client: Optional[str] = None
    spent: Money = 0
    completion_percentage: Percentage = 0


class Worker(LedgerModel):
    id: str = Field(default_factory=new_id)
    worker_id: str = ""  # site code such as W-101
    name: str = ""
    project_id: str
    designation: str = ""
    joining_date: OptionalDate = None
    exit_date: OptionalDate = None
    serial_no: OptionalInt = None


class Bill(LedgerModel):
    id: str = Field(default_factory=new_id)
    serial_no: OptionalInt = None
    project_id: str
    bill_no: str = ""
    work_nature: str = ""
    amount: Money = 0
    gst_rate: Quantity = 0
    gst_amount: Money = 0
    grand_total: Optional[Money] = None
    billing_month: BillingMonth = ""
    certify_date: OptionalDate = None


class ClientPayment(LedgerModel):
    id: str = Field(default_factory=new_id)
    project_id: str
    amount: Money = 0
    date: date
    remarks: Optional[str] = None


class PurchaseEntry(LedgerModel):
    id: str = Field(default_factory=new_id)
    serial_no: OptionalInt = None
    project_id: str
    description: str = ""
    unit: str = ""
    quantity: Quantity = 0
    rate: Money = 0
    total_amount: Money = 0
    date: OptionalDate = None


class KharchiEntry(LedgerModel):
    id: str = Field(default_factory=new_id)
    worker_id: str
    project_id: str
    date: date  # the Sunday it was paid
    amount: Money = 0

    @property
    def key(self) -> tuple:
        return (self.worker_id, self.date)


class AdvanceEntry(LedgerModel):
    id: str = Field(default_factory=new_id)
    serial_no: OptionalInt = None
    worker_id: str
    project_id: str
    amount: Money = 0
    paid_by: str = ""
    remarks: str = ""
    date: date
    payment_mode: Optional[str] = None


class MessEntry(LedgerModel):
    id: str = Field(default_factory=new_id)
    project_id: str
    week_start_date: date
    week_end_date: OptionalDate = None
    worker_count: Count = 0
    rate: Money = 0
    total_amount: Money = 0
    amount_paid: Money = 0
    other_expenses: Money = 0
    other_expenses_desc: str = ""
    balance: SignedMoney = 0
    remarks: str = ""


class WorkerPaymentRecord(LedgerModel):
    id: str = Field(default_factory=new_id)
    serial_no: OptionalInt = None
    worker_id: str
    project_id: str
    month: Month
    work_amount: Money = 0
    mess_deduction: Money = 0
    kharchi_deduction: Money = 0
    advance_deduction: Money = 0
    net_payable: SignedMoney = 0
    is_paid: bool = True
    date: Optional[datetime] = None

    @property
    def key(self) -> tuple:
        return (self.worker_id, self.month)


class PourStage(LedgerModel):
    date: OptionalDate = None
    cycle: OptionalInt = None


class ExecutionLevel(LedgerModel):
    id: str = Field(default_factory=new_id)
    project_id: str
    level_name: str = ""
    pours: List[PourStage] = Field(default_factory=list)


class EstimateItem(LedgerModel):
    description: str = ""
    quantity: Quantity = 0
    unit: str = ""
    unit_price: Money = 0
    total: Money = 0


class ChatMessage(LedgerModel):
    role: Literal["user", "model"]
    text: str
