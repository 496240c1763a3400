"""
Python client for the ATOL Online fiscal-receipt registration service (protocol v4).
"""

from atol_online.client import AtolClient
from atol_online.core.cache import MemoryTokenCache, TokenCache
from atol_online.core.config import AtolEnvironment, AtolSettings
from atol_online.core.exceptions import (
    AtolError,
    AuthError,
    ClientError,
    DocumentValidationError,
    MissingFieldError,
    ResponseFormatError,
    ServiceError,
    TransportError,
)
from atol_online.core.transport import HttpxTransport, Transport, TransportResponse
from atol_online.schemas.documents import (
    Buy,
    BuyCorrection,
    BuyRefund,
    Client,
    Company,
    Correction,
    CorrectionInfo,
    CorrectionType,
    Item,
    Payment,
    PaymentMethod,
    PaymentObject,
    PaymentType,
    Receipt,
    Sell,
    SellCorrection,
    SellRefund,
    TaxSystem,
    Vat,
    VatType,
)
from atol_online.schemas.models import Report, ReportPayload, ReportStatus

__version__ = "1.0.0"
__all__ = [
    "AtolClient",
    "AtolEnvironment",
    "AtolError",
    "AtolSettings",
    "AuthError",
    "Buy",
    "BuyCorrection",
    "BuyRefund",
    "Client",
    "ClientError",
    "Company",
    "Correction",
    "CorrectionInfo",
    "CorrectionType",
    "DocumentValidationError",
    "HttpxTransport",
    "Item",
    "MemoryTokenCache",
    "MissingFieldError",
    "Payment",
    "PaymentMethod",
    "PaymentObject",
    "PaymentType",
    "Receipt",
    "Report",
    "ReportPayload",
    "ReportStatus",
    "ResponseFormatError",
    "Sell",
    "SellCorrection",
    "SellRefund",
    "ServiceError",
    "TaxSystem",
    "TokenCache",
    "Transport",
    "TransportError",
    "TransportResponse",
    "Vat",
    "VatType",
]
