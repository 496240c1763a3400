"""
ATOL Online Pydantic Schemas
Response envelope models returned by the service.
"""

from __future__ import annotations
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from atol_online.core.exceptions import ResponseFormatError


# ─────────────────────────────────────────────────────────────
# ENVELOPE
# ─────────────────────────────────────────────────────────────

class ErrorInfo(BaseModel):
    """The `error` object present in every ATOL response."""
    error_id: Optional[str] = None
    code: Optional[int] = None
    text: Optional[str] = None
    type: Optional[str] = Field(None, description="system | agent | driver | timeout")

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)


def extract_error(data: dict) -> Optional[ErrorInfo]:
    """Parsed `error` of an envelope, or None when it is null or empty."""
    raw = data.get("error")
    if not raw:
        return None
    if not isinstance(raw, dict):
        return ErrorInfo(text=str(raw))
    try:
        return ErrorInfo.model_validate(raw)
    except ValidationError as e:
        raise ResponseFormatError(f"Malformed error object: {raw}", response=data) from e


# ─────────────────────────────────────────────────────────────
# AUTH
# ─────────────────────────────────────────────────────────────

class TokenResponse(BaseModel):
    """Body of a successful getToken call."""
    token: Optional[str] = None
    timestamp: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_response(cls, data: dict) -> "TokenResponse":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ResponseFormatError(f"Malformed getToken response: {e}", response=data) from e


# ─────────────────────────────────────────────────────────────
# REPORT
# ─────────────────────────────────────────────────────────────

class ReportStatus(str, Enum):
    WAIT = "wait"
    DONE = "done"
    FAIL = "fail"


class ReportPayload(BaseModel):
    """Fiscal attributes of a registered receipt."""
    total: Optional[float] = None
    fns_site: Optional[str] = None
    fn_number: Optional[str] = None
    shift_number: Optional[int] = None
    receipt_datetime: Optional[str] = None
    fiscal_receipt_number: Optional[int] = None
    fiscal_document_number: Optional[int] = None
    ecr_registration_number: Optional[str] = None
    fiscal_document_attribute: Optional[int] = None

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)


class Report(BaseModel):
    """Processing result of a submitted document. Read-only."""
    uuid: str
    status: ReportStatus
    error: Optional[ErrorInfo] = None
    payload: Optional[ReportPayload] = None
    timestamp: Optional[str] = None
    group_code: Optional[str] = None
    daemon_code: Optional[str] = None
    device_code: Optional[str] = None
    external_id: Optional[str] = None
    callback_url: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra="ignore", coerce_numbers_to_str=True)

    @classmethod
    def from_response(cls, data: dict) -> "Report":
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ResponseFormatError(f"Malformed report response: {e}", response=data) from e

    @property
    def is_pending(self) -> bool:
        return self.status == ReportStatus.WAIT

    @property
    def is_done(self) -> bool:
        return self.status == ReportStatus.DONE

    @property
    def is_failed(self) -> bool:
        return self.status == ReportStatus.FAIL
