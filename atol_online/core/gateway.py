"""
ATOL Online — Gateway
Shared request plumbing: URL and header building, JSON encoding, transport
call, envelope decoding and request/response tracing.
"""

import json
from typing import Optional

from atol_online.core.config import AtolSettings, get_api_url
from atol_online.core.exceptions import ResponseFormatError, TransportError
from atol_online.core.log import EventLogger
from atol_online.core.transport import Transport
from atol_online.utils.helpers import mask_token


class Gateway:
    """
    Performs one call against the ATOL API and returns the decoded envelope.

    A call without a body is a GET, a call with a body is a POST.
    Error classification is left to the caller.
    """

    ACCEPT = "application/json; charset=utf-8"

    def __init__(self, settings: AtolSettings, transport: Transport,
                 events: Optional[EventLogger] = None):
        self.settings = settings
        self.transport = transport
        self.events = events or EventLogger()

    def url(self, service: str, **params: str) -> str:
        return get_api_url(self.settings, service, **params)

    def call(self, url: str, data: Optional[dict] = None,
             token: Optional[str] = None) -> dict:
        method = "GET" if data is None else "POST"
        headers = {"Accept": self.ACCEPT}
        if token is not None:
            headers["Token"] = token
        body = None
        if method == "POST":
            headers["Content-Type"] = "application/json"
            body = json.dumps(data).encode("utf-8")

        self.events.debug(
            "request: url=%s headers=%s data=%s",
            url, self._loggable(headers), self._redact(data),
        )

        try:
            response = self.transport.request(method, url, headers, body)
        except TransportError as e:
            self.events.warning("error: %s", e.message)
            raise

        self.events.debug("response: %s", response.text)

        return self._decode(response.text, response.status_code)

    def _decode(self, text: str, status_code: int) -> dict:
        try:
            decoded = json.loads(text)
        except ValueError as e:
            self.events.warning("error: non-JSON response (HTTP %s) %s", status_code, text[:300])
            raise ResponseFormatError(
                f"ATOL returned a non-JSON response (HTTP {status_code}): {text[:300]}"
            ) from e

        if not isinstance(decoded, dict):
            raise ResponseFormatError(
                f"ATOL returned an unexpected response (HTTP {status_code}): {text[:300]}"
            )
        return decoded

    @staticmethod
    def _redact(data: Optional[dict]) -> Optional[dict]:
        if not data or "pass" not in data:
            return data
        return {**data, "pass": "***"}

    @staticmethod
    def _loggable(headers: dict) -> dict:
        if "Token" not in headers:
            return headers
        return {**headers, "Token": mask_token(headers["Token"])}
