# src/flightsearch/services/amadeus_client.py

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import requests

from flightsearch.config import Settings, get_settings
from flightsearch.core.schemas import validate_token_response

logger = logging.getLogger(__name__)

TOKEN_REFRESH_BUFFER_SECONDS = 60.0


class AmadeusError(RuntimeError):
    """Failed call to the Amadeus API (token, transport or non-2xx response)."""

    def __init__(self, message: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail or message


@dataclass
class TokenCache:
    """
    OAuth2 access token shared by every client it is passed to.

    Lifecycle: empty -> populated(token, expiry) -> refreshed. A token is only
    handed out while it has more than `refresh_buffer` seconds left.
    """

    refresh_buffer: float = TOKEN_REFRESH_BUFFER_SECONDS
    clock: Callable[[], float] = time.time
    access_token: Optional[str] = None
    expires_at: float = 0.0  # seconds since epoch
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def is_empty(self) -> bool:
        return self.access_token is None

    def valid_token(self) -> Optional[str]:
        if self.access_token and self.clock() < self.expires_at - self.refresh_buffer:
            return self.access_token
        return None

    def store(self, access_token: str, expires_in: float) -> None:
        self.access_token = access_token
        self.expires_at = self.clock() + float(expires_in)

    def invalidate(self) -> None:
        self.access_token = None
        self.expires_at = 0.0


def _error_detail(resp: requests.Response) -> Optional[str]:
    try:
        payload = resp.json()
    except ValueError:
        return None
    errors = payload.get("errors") if isinstance(payload, dict) else None
    if isinstance(errors, list) and errors and isinstance(errors[0], dict):
        detail = errors[0].get("detail") or errors[0].get("title")
        return str(detail) if detail else None
    return None


class AmadeusClient:
    """
    Minimal Amadeus REST client with OAuth2 client-credentials token caching.
    """

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        host: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
        token_cache: Optional[TokenCache] = None,
        settings: Optional[Settings] = None,
    ):
        settings = settings or get_settings()

        self.client_id = (client_id or settings.amadeus_client_id).strip()
        self.client_secret = (client_secret or settings.amadeus_client_secret).strip()
        self.base_url = (host or settings.amadeus_host).rstrip("/")
        self.timeout_seconds = timeout_seconds or settings.timeout_seconds
        self.token_cache = token_cache if token_cache is not None else TokenCache()

        if not self.client_id or not self.client_secret:
            raise AmadeusError(
                "Missing Amadeus credentials. Set AMADEUS_CLIENT_ID and AMADEUS_CLIENT_SECRET."
            )

    def _fetch_token(self) -> str:
        url = f"{self.base_url}/v1/security/oauth2/token"
        data = {
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }
        headers = {"Content-Type": "application/x-www-form-urlencoded"}

        try:
            resp = requests.post(url, data=data, headers=headers,
                                 timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            raise AmadeusError(f"Amadeus token request failed: {exc}") from exc

        # Helpful error detail without leaking secrets
        if resp.status_code != 200:
            raise AmadeusError(
                f"Amadeus token request failed: {resp.status_code} {resp.text}",
                status_code=resp.status_code,
                detail=_error_detail(resp),
            )

        try:
            payload = resp.json()
        except ValueError as exc:
            raise AmadeusError("Amadeus returned invalid JSON for token",
                               status_code=resp.status_code) from exc

        parsed = validate_token_response(payload)
        if not parsed.ok:
            raise AmadeusError("Unexpected token response from Amadeus",
                               status_code=resp.status_code)

        token = parsed.value
        self.token_cache.store(token.access_token, token.expires_in)
        logger.info("Fetched Amadeus access token (expires in %ss)", token.expires_in)
        return token.access_token

    def access_token(self, stale: Optional[str] = None) -> str:
        """
        Cached token, refreshed at most once per expiry window across threads.

        `stale` is a token the API just rejected; it is dropped from the cache
        unless another caller has already replaced it.
        """
        with self.token_cache.lock:
            if stale is not None and self.token_cache.access_token == stale:
                self.token_cache.invalidate()
            token = self.token_cache.valid_token()
            if token:
                return token
            return self._fetch_token()

    def _send(self, url: str, params: Dict[str, Any], token: str) -> requests.Response:
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        try:
            return requests.get(url, params=params, headers=headers,
                                timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            raise AmadeusError(f"Amadeus request failed: {exc}") from exc

    def get(self, path: str, params: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        token = self.access_token()
        resp = self._send(url, params, token)

        # If token expired unexpectedly, refresh once and retry
        if resp.status_code == 401:
            logger.info("Amadeus returned 401 for %s, refreshing token", path)
            resp = self._send(url, params, self.access_token(stale=token))

        if not resp.ok:
            detail = _error_detail(resp)
            logger.warning("Amadeus %s failed: %s %s", path, resp.status_code, detail)
            raise AmadeusError(
                f"Amadeus request to {path} failed: {resp.status_code}",
                status_code=resp.status_code,
                detail=detail,
            )

        try:
            return resp.json()
        except ValueError as exc:
            raise AmadeusError(f"Amadeus returned invalid JSON for {path}",
                               status_code=resp.status_code) from exc
