"""
ATOL Online — Fiscal documents
===============================
Typed request bodies for the v4 protocol.

Validation happens in two places:
- ranges, lengths and enum values are checked when a field is set
  (construction or assignment), by pydantic;
- required fields are checked by serialize(), which raises
  MissingFieldError naming the first unset field.

Amounts are stored as given and rounded only when serialized.
"""
from datetime import date, datetime
from enum import Enum, IntEnum
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field

from atol_online.core.exceptions import MissingFieldError
from atol_online.utils.helpers import (
    format_date,
    format_timestamp,
    generate_external_id,
    round_amount,
)

MAX_PAYMENT_SUM = 99_999_999
MAX_ITEM_AMOUNT = 42_949_672.95
MAX_VAT_SUM = 99_999_999.99
MAX_QUANTITY = 99_999.999


# ─────────────────────────────────────────────────────────────
# ENUMS
# ─────────────────────────────────────────────────────────────

class PaymentType(IntEnum):
    CASH = 0          # наличные
    ELECTRONIC = 1    # безналичный
    PREPAYMENT = 2    # зачет аванса и (или) предыдущих платежей
    CREDIT = 3        # постоплата (кредит)
    OTHER = 4         # встречное предоставление


class VatType(str, Enum):
    NONE = "none"
    VAT0 = "vat0"
    VAT10 = "vat10"
    VAT110 = "vat110"
    VAT18 = "vat18"
    VAT118 = "vat118"
    VAT20 = "vat20"
    VAT120 = "vat120"


class TaxSystem(str, Enum):
    OSN = "osn"
    USN_INCOME = "usn_income"
    USN_INCOME_OUTCOME = "usn_income_outcome"
    ENVD = "envd"
    ESN = "esn"
    PATENT = "patent"


class PaymentMethod(str, Enum):
    FULL_PREPAYMENT = "full_prepayment"
    PREPAYMENT = "prepayment"
    ADVANCE = "advance"
    FULL_PAYMENT = "full_payment"
    PARTIAL_PAYMENT = "partial_payment"
    CREDIT = "credit"
    CREDIT_PAYMENT = "credit_payment"


class PaymentObject(str, Enum):
    COMMODITY = "commodity"
    EXCISE = "excise"
    JOB = "job"
    SERVICE = "service"
    GAMBLING_BET = "gambling_bet"
    GAMBLING_PRIZE = "gambling_prize"
    LOTTERY = "lottery"
    LOTTERY_PRIZE = "lottery_prize"
    INTELLECTUAL_ACTIVITY = "intellectual_activity"
    PAYMENT = "payment"
    AGENT_COMMISSION = "agent_commission"
    COMPOSITE = "composite"
    ANOTHER = "another"


class CorrectionType(str, Enum):
    SELF = "self"
    INSTRUCTION = "instruction"


# ─────────────────────────────────────────────────────────────
# BASE
# ─────────────────────────────────────────────────────────────

class DocumentPayload(dict):
    """Serialized document body, tagged with the operation it belongs to."""

    def __init__(self, operation: str, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.operation = operation


class DocumentPart(BaseModel):
    model_config = ConfigDict(
        validate_assignment=True,
        validate_default=True,
        use_enum_values=True,
        extra="forbid",
        allow_inf_nan=False,
    )

    def _require(self, *names: str) -> None:
        for name in names:
            value = getattr(self, name)
            if value is None or (isinstance(value, list) and not value):
                raise MissingFieldError(type(self).__name__, name)

    def serialize(self) -> dict:
        raise NotImplementedError


# ─────────────────────────────────────────────────────────────
# PARTS
# ─────────────────────────────────────────────────────────────

class Payment(DocumentPart):
    """
    One payment line.

    `type` is kept as a raw int: besides the PaymentType values, codes 5-9
    are vendor-extended payment types and are passed through as given.
    """
    type: Optional[int] = PaymentType.ELECTRONIC
    sum: Optional[float] = Field(None, ge=0, le=MAX_PAYMENT_SUM)

    def serialize(self) -> dict:
        self._require("type", "sum")
        return {
            "type": int(self.type),
            "sum": round_amount(self.sum),
        }


class Vat(DocumentPart):
    type: Optional[VatType] = None
    sum: Optional[float] = Field(None, ge=0, le=MAX_VAT_SUM)

    def serialize(self) -> dict:
        self._require("type")
        data = {"type": self.type}
        if self.sum is not None:
            data["sum"] = round_amount(self.sum)
        return data


class Item(DocumentPart):
    name: Optional[str] = Field(None, min_length=1, max_length=128)
    price: Optional[float] = Field(None, ge=0, le=MAX_ITEM_AMOUNT)
    quantity: Optional[float] = Field(None, ge=0, le=MAX_QUANTITY)
    sum: Optional[float] = Field(None, ge=0, le=MAX_ITEM_AMOUNT)
    measurement_unit: Optional[str] = Field(None, max_length=16)
    payment_method: Optional[PaymentMethod] = PaymentMethod.FULL_PAYMENT
    payment_object: Optional[PaymentObject] = PaymentObject.COMMODITY
    vat: Optional[Vat] = None

    def serialize(self) -> dict:
        self._require("name", "price", "quantity", "sum",
                      "payment_method", "payment_object", "vat")
        data = {
            "name": self.name,
            "price": round_amount(self.price),
            "quantity": round_amount(self.quantity, 3),
            "sum": round_amount(self.sum),
        }
        if self.measurement_unit:
            data["measurement_unit"] = self.measurement_unit
        data["payment_method"] = self.payment_method
        data["payment_object"] = self.payment_object
        data["vat"] = self.vat.serialize()
        return data


class Client(DocumentPart):
    """Buyer contacts; the receipt is sent to one of them."""
    email: Optional[str] = Field(None, max_length=64)
    phone: Optional[str] = Field(None, max_length=64)

    def serialize(self) -> dict:
        if not self.email and not self.phone:
            raise MissingFieldError(type(self).__name__, "email or phone")
        data = {}
        if self.email:
            data["email"] = self.email
        if self.phone:
            data["phone"] = self.phone
        return data


class Company(DocumentPart):
    email: Optional[str] = Field(None, max_length=64)
    sno: Optional[TaxSystem] = None
    inn: Optional[str] = Field(None, pattern=r"^(\d{10}|\d{12})$")
    payment_address: Optional[str] = Field(None, max_length=256)

    def serialize(self) -> dict:
        self._require("email", "inn", "payment_address")
        data = {"email": self.email}
        if self.sno:
            data["sno"] = self.sno
        data["inn"] = self.inn
        data["payment_address"] = self.payment_address
        return data


class Receipt(DocumentPart):
    client: Optional[Client] = None
    company: Optional[Company] = None
    items: list[Item] = Field(default_factory=list, max_length=100)
    payments: list[Payment] = Field(default_factory=list, max_length=10)
    vats: list[Vat] = Field(default_factory=list, max_length=6)
    total: Optional[float] = Field(None, ge=0, le=MAX_ITEM_AMOUNT)

    def add_item(self, item: Item) -> "Receipt":
        self.items = [*self.items, item]
        return self

    def add_payment(self, payment: Payment) -> "Receipt":
        self.payments = [*self.payments, payment]
        return self

    def add_vat(self, vat: Vat) -> "Receipt":
        self.vats = [*self.vats, vat]
        return self

    def serialize(self) -> dict:
        self._require("client", "company", "items", "payments", "total")
        data = {
            "client": self.client.serialize(),
            "company": self.company.serialize(),
            "items": [item.serialize() for item in self.items],
            "payments": [payment.serialize() for payment in self.payments],
        }
        if self.vats:
            data["vats"] = [vat.serialize() for vat in self.vats]
        data["total"] = round_amount(self.total)
        return data


class CorrectionInfo(DocumentPart):
    type: Optional[CorrectionType] = None
    base_date: Optional[date] = None
    base_number: Optional[str] = Field(None, max_length=32)

    def serialize(self) -> dict:
        self._require("type", "base_date", "base_number")
        return {
            "type": self.type,
            "base_date": format_date(self.base_date),
            "base_number": self.base_number,
        }


class Correction(DocumentPart):
    company: Optional[Company] = None
    correction_info: Optional[CorrectionInfo] = None
    payments: list[Payment] = Field(default_factory=list, max_length=10)
    vats: list[Vat] = Field(default_factory=list, max_length=6)

    def add_payment(self, payment: Payment) -> "Correction":
        self.payments = [*self.payments, payment]
        return self

    def add_vat(self, vat: Vat) -> "Correction":
        self.vats = [*self.vats, vat]
        return self

    def serialize(self) -> dict:
        self._require("company", "correction_info", "payments", "vats")
        return {
            "company": self.company.serialize(),
            "correction_info": self.correction_info.serialize(),
            "payments": [payment.serialize() for payment in self.payments],
            "vats": [vat.serialize() for vat in self.vats],
        }


# ─────────────────────────────────────────────────────────────
# DOCUMENTS
# ─────────────────────────────────────────────────────────────

class FiscalDocument(DocumentPart):
    """
    A request registered through possystem/{version}/{group}/{operation}.

    Subclasses fix `operation`; it is a class attribute and cannot be set
    on an instance.
    """
    operation: ClassVar[str] = ""

    external_id: Optional[str] = Field(default_factory=generate_external_id,
                                       min_length=1, max_length=128)
    callback_url: Optional[str] = Field(None, max_length=256)
    timestamp: Optional[datetime] = Field(default_factory=datetime.now)

    def _body(self) -> tuple[str, dict]:
        raise NotImplementedError

    def serialize(self) -> DocumentPayload:
        self._require("external_id", "timestamp")
        key, body = self._body()
        payload = DocumentPayload(self.operation)
        payload["external_id"] = self.external_id
        payload[key] = body
        if self.callback_url:
            payload["service"] = {"callback_url": self.callback_url}
        payload["timestamp"] = format_timestamp(self.timestamp)
        return payload


class ReceiptDocument(FiscalDocument):
    receipt: Optional[Receipt] = None

    def _body(self) -> tuple[str, dict]:
        self._require("receipt")
        return "receipt", self.receipt.serialize()


class Sell(ReceiptDocument):
    """Приход."""
    operation: ClassVar[str] = "sell"


class SellRefund(ReceiptDocument):
    """Возврат прихода."""
    operation: ClassVar[str] = "sell_refund"


class Buy(ReceiptDocument):
    """Расход."""
    operation: ClassVar[str] = "buy"


class BuyRefund(ReceiptDocument):
    """Возврат расхода."""
    operation: ClassVar[str] = "buy_refund"


class CorrectionDocument(FiscalDocument):
    correction: Optional[Correction] = None

    def _body(self) -> tuple[str, dict]:
        self._require("correction")
        return "correction", self.correction.serialize()


class SellCorrection(CorrectionDocument):
    """Коррекция прихода."""
    operation: ClassVar[str] = "sell_correction"


class BuyCorrection(CorrectionDocument):
    """Коррекция расхода."""
    operation: ClassVar[str] = "buy_correction"
