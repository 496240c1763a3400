"""
ATOL Online — Module 3: ReportFetcher
Reads the processing result of a registered document.

ATOL Report Endpoint:
- URL: GET possystem/{version}/{group_code}/report/{uuid}
- Headers: Token: {token}
- Response: {
    "uuid": "...",
    "error": null | {"error_id", "code", "text", "type"},
    "status": "wait" | "done" | "fail",
    "payload": {"total", "fns_site", "fn_number", "shift_number", ...},
    "timestamp": "...", "group_code": "...", "daemon_code": "...",
    "device_code": "...", "external_id": "...", "callback_url": "..."
  }

Unlike RequestOrchestrator.send there is no bad-token retry here: an
expired token surfaces as ClientError. Polling is left to the caller.
"""

from atol_online.core.exceptions import ClientError
from atol_online.core.gateway import Gateway
from atol_online.modules.token_manager import TokenManager
from atol_online.schemas.models import Report, extract_error


class ReportFetcher:

    def __init__(self, gateway: Gateway, token_manager: TokenManager):
        self.gateway = gateway
        self.token_manager = token_manager

    def get_report(self, uuid: str) -> Report:
        """
        Fetch the report of a document by the uuid returned from send().

        Raises:
            ClientError: if the response carries an error or is malformed
            AuthError: if a token cannot be obtained
            TransportError: if the service cannot be reached
        """
        settings = self.gateway.settings
        token = self.token_manager.get_token(settings.login, settings.password)

        response = self.gateway.call(self.gateway.url("report", uuid=uuid), token=token)

        error = extract_error(response)
        if error is not None:
            self.gateway.events.warning("error: %s %s", error.text, response)
            raise ClientError.from_error(error, response=response)

        return Report.from_response(response)
