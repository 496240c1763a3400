"""
ATOL Online — Helpers
Amount rounding, ATOL date formats and identifiers.
"""

import uuid
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

TIMESTAMP_FORMAT = "%d.%m.%Y %H:%M:%S"
DATE_FORMAT = "%d.%m.%Y"


def round_amount(value: float, places: int = 2) -> float:
    """
    Round half away from zero to a fixed number of decimals.

    Goes through the decimal representation of the float, so 150.005
    becomes 150.01 rather than the 150.0 that round() gives.
    """
    quantum = Decimal(1).scaleb(-places)
    rounded = Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    return float(rounded)


def format_timestamp(value: datetime) -> str:
    """ATOL timestamp: dd.mm.YYYY HH:MM:SS"""
    return value.strftime(TIMESTAMP_FORMAT)


def format_date(value: date) -> str:
    """ATOL date: dd.mm.YYYY"""
    return value.strftime(DATE_FORMAT)


def generate_external_id() -> str:
    """Client-side document id, unique per submission."""
    return str(uuid.uuid4())


def mask_token(token: Optional[str]) -> Optional[str]:
    """Token preview safe to write to logs."""
    if not token:
        return token
    if len(token) <= 12:
        return "***"
    return f"{token[:6]}...{token[-4:]}"
