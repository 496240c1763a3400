"""
ATOL Online — Client
Wires settings, cache, transport and logger into the three services.

Complete flow:
  1. client.send(document)   → registers the document, returns its uuid
  2. client.get_report(uuid) → processing result (wait / done / fail)

Dependencies are injected; nothing is global. A client only closes the
transport it created itself.
"""

from typing import Optional

from atol_online.core.cache import MemoryTokenCache, TokenCache
from atol_online.core.config import AtolSettings
from atol_online.core.gateway import Gateway
from atol_online.core.log import EventLogger, LoggerLike
from atol_online.core.transport import HttpxTransport, Transport
from atol_online.modules.report_fetcher import ReportFetcher
from atol_online.modules.request_orchestrator import RequestOrchestrator
from atol_online.modules.token_manager import TokenManager
from atol_online.schemas.documents import FiscalDocument
from atol_online.schemas.models import Report


class AtolClient:
    """
    Usage:
        settings = AtolSettings(login="...", password="...", group_code="...")
        with AtolClient(settings, logger=logging.getLogger("atol")) as client:
            uuid = client.send(Sell(receipt=receipt))
            report = client.get_report(uuid)
    """

    def __init__(self, settings: AtolSettings, cache: Optional[TokenCache] = None,
                 transport: Optional[Transport] = None,
                 logger: Optional[LoggerLike] = None):
        self.settings = settings
        self._owned_transport = None
        if transport is None:
            transport = self._owned_transport = HttpxTransport(timeout=settings.timeout)

        self.gateway = Gateway(settings, transport, EventLogger(logger))
        self.token_manager = TokenManager(self.gateway, cache or MemoryTokenCache())
        self.orchestrator = RequestOrchestrator(self.gateway, self.token_manager)
        self.report_fetcher = ReportFetcher(self.gateway, self.token_manager)

    def send(self, document: FiscalDocument) -> str:
        return self.orchestrator.send(document)

    def get_report(self, uuid: str) -> Report:
        return self.report_fetcher.get_report(uuid)

    def close(self) -> None:
        if self._owned_transport is not None:
            self._owned_transport.close()

    def __enter__(self) -> "AtolClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
