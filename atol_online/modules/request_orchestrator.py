"""
ATOL Online — Module 2: RequestOrchestrator
Registers fiscal documents.

Flow:
1. Serialize the document (validation errors are raised before any I/O)
2. POST to possystem/{version}/{group_code}/{operation} with the cached token
3. Classify the envelope:
   - error is null          -> Accepted(uuid)
   - error.code == 11       -> BadToken(error), the token was revoked
   - any other error        -> ClientError
4. On BadToken: invalidate the cached token, acquire a new one and try once
   more. A second BadToken is raised as ClientError.

The cache TTL is local bookkeeping only; ATOL can expire a token earlier,
which is why a stale token is detected here and healed without involving
the caller.
"""

from dataclasses import dataclass
from typing import Union

from atol_online.core.exceptions import ClientError, ResponseFormatError
from atol_online.core.gateway import Gateway
from atol_online.modules.token_manager import TokenManager
from atol_online.schemas.documents import FiscalDocument
from atol_online.schemas.models import ErrorInfo, extract_error

BAD_TOKEN_CODE = 11


@dataclass(frozen=True)
class Accepted:
    uuid: str


@dataclass(frozen=True)
class BadToken:
    error: ErrorInfo
    response: dict


AttemptResult = Union[Accepted, BadToken]


class RequestOrchestrator:
    """
    Usage:
        orchestrator = RequestOrchestrator(gateway, token_manager)
        uuid = orchestrator.send(Sell(receipt=receipt))
    """

    MAX_ATTEMPTS = 2

    def __init__(self, gateway: Gateway, token_manager: TokenManager):
        self.gateway = gateway
        self.token_manager = token_manager

    def send(self, document: FiscalDocument) -> str:
        """
        Register a document and return the uuid ATOL assigned to it.

        Raises:
            DocumentValidationError: if the document is incomplete
            AuthError: if a token cannot be obtained
            ClientError: on any error response, including a bad token after the retry
            TransportError: if the service cannot be reached
        """
        payload = document.serialize()
        url = self.gateway.url("operation", operation=payload.operation)
        settings = self.gateway.settings

        result = None
        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            if isinstance(result, BadToken):
                self.token_manager.invalidate(settings.login)
            token = self.token_manager.get_token(settings.login, settings.password)

            result = self._attempt(url, payload, token)
            if isinstance(result, Accepted):
                return result.uuid

            self.gateway.events.warning(
                "bad token on attempt %s/%s: %s", attempt, self.MAX_ATTEMPTS, result.error.text,
            )

        raise ClientError.from_error(result.error, response=result.response)

    def _attempt(self, url: str, payload: dict, token: str) -> AttemptResult:
        response = self.gateway.call(url, payload, token=token)

        error = extract_error(response)
        if error is not None:
            if error.code == BAD_TOKEN_CODE:
                return BadToken(error, response)
            self.gateway.events.warning("error: %s %s", error.text, response)
            raise ClientError.from_error(error, response=response)

        uuid = response.get("uuid")
        if not uuid:
            raise ResponseFormatError("ATOL returned no uuid for the document", response=response)
        return Accepted(str(uuid))
