"""
ATOL Online — Module 1: TokenManager
Acquires, caches and invalidates the bearer token of a merchant login.

Flow:
1. Look up the cache under "atol.token" + login; a hit is returned as is
2. Otherwise POST possystem/{version}/getToken with {"login", "pass"}
3. Store the returned token for 24h and return it

ATOL getToken Details:
- Body: {"login": "...", "pass": "..."}
- Response: {"error": null, "token": "...", "timestamp": "dd.mm.YYYY HH:MM:SS"}
- Token validity: 24h, but the server may revoke it earlier; see
  RequestOrchestrator for the reactive refresh

There is no background refresh. Callers invalidate() on proof of expiry
and ask for a token again.
"""

from atol_online.core.cache import TokenCache
from atol_online.core.exceptions import AuthError
from atol_online.core.gateway import Gateway
from atol_online.schemas.models import TokenResponse, extract_error

TOKEN_CACHE_PREFIX = "atol.token"


class TokenManager:
    """
    Usage:
        manager = TokenManager(gateway, cache)
        token = manager.get_token(login, password)
        manager.invalidate(login)
    """

    def __init__(self, gateway: Gateway, cache: TokenCache):
        self.gateway = gateway
        self.cache = cache

    @staticmethod
    def cache_key(login: str) -> str:
        return f"{TOKEN_CACHE_PREFIX}{login}"

    def get_token(self, login: str, password: str) -> str:
        """
        Cached token for the login, requesting a new one on a cache miss.

        Raises:
            AuthError: if the service rejects the credentials or returns no token
            ResponseFormatError: if the reply is not a getToken envelope
            TransportError: if the service cannot be reached
        """
        key = self.cache_key(login)
        if self.cache.has(key):
            cached = self.cache.get(key)
            # may have expired between has() and get()
            if cached is not None:
                return str(cached)

        data = {
            "login": login,
            "pass": password,
        }
        response = self.gateway.call(self.gateway.url("get_token"), data)

        error = extract_error(response)
        if error is not None:
            self.gateway.events.warning("error: %s %s", error.text, response)
            raise AuthError.from_error(error, response=response)

        token = TokenResponse.from_response(response).token
        if not token:
            raise AuthError("ATOL returned no token in getToken response", response=response)

        self.cache.set(key, token, self.gateway.settings.token_ttl_seconds)
        return token

    def invalidate(self, login: str) -> None:
        self.cache.delete(self.cache_key(login))
