"""
ATOL Online — Transport
Pluggable HTTP layer. The default implementation is backed by httpx.

A transport only reports what came back over the wire. ATOL puts its error
details into the JSON body of 4xx responses, so HTTP statuses are passed
through untouched and classified by the gateway; only failures to complete
the exchange raise TransportError.
"""

from dataclasses import dataclass
from typing import Optional, Protocol

import httpx

from atol_online.core.exceptions import TransportError


@dataclass(frozen=True)
class TransportResponse:
    status_code: int
    text: str


class Transport(Protocol):
    """Anything able to perform one HTTP exchange."""

    def request(self, method: str, url: str, headers: dict,
                body: Optional[bytes] = None) -> TransportResponse:
        ...


class HttpxTransport:
    """
    Synchronous transport on top of httpx.Client.

    Usage:
        transport = HttpxTransport(timeout=30.0)
        response = transport.request("GET", url, headers)
        transport.close()
    """

    TIMEOUT_SECONDS = 30.0

    def __init__(self, timeout: float = TIMEOUT_SECONDS,
                 client: Optional[httpx.Client] = None):
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=timeout, follow_redirects=True, verify=True,
        )

    def request(self, method: str, url: str, headers: dict,
                body: Optional[bytes] = None) -> TransportResponse:
        try:
            response = self._client.request(method, url, headers=headers, content=body)
        except httpx.TimeoutException as e:
            raise TransportError(f"Timeout connecting to {url}", url=url) from e
        except httpx.TransportError as e:
            raise TransportError(f"Could not connect to {url}: {e}", url=url) from e
        except httpx.RequestError as e:
            # redirect loops and undecodable bodies
            raise TransportError(f"Request to {url} failed: {e}", url=url) from e

        return TransportResponse(status_code=response.status_code, text=response.text)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
