from typing import Any, Optional
import json
import logging

import httpx
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from ..config.settings import Settings, settings as default_settings
from ..errors import TransportError

# Set up module-level logger
logger = logging.getLogger(__name__)


def _headers() -> dict[str, str]:
    return {
        "Accept": "application/json",
        "Content-Type": "application/json",
    }


def _drop_none(data: Optional[dict[str, Any]]) -> Optional[dict[str, Any]]:
    if data is None:
        return None
    return {k: v for k, v in data.items() if v is not None}


def _raise_with_context(resp: httpx.Response, method: str, url: str) -> None:
    try:
        body = resp.json()  # Attempt to parse JSON response
    except ValueError:
        body = resp.text  # Fallback to raw text if JSON parsing fails
    msg = f"HTTP {resp.status_code} {resp.reason_phrase} at {method} {url}"
    logger.error("%s\n%s", msg, body)
    raise TransportError(msg, method=method, url=url, status_code=resp.status_code, body=body)


class HttpTransport:
    """Default ``get``/``post``/``patch`` collaborator for resources.

    Each call opens its own ``httpx.AsyncClient``, authenticates with the key
    pair and returns the decoded JSON body. Only connection failures, where
    the request never reached the server, are retried.
    """

    def __init__(
        self,
        key_id: Optional[str] = None,
        key_secret: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        connect_attempts: Optional[int] = None,
        settings: Optional[Settings] = None,
    ):
        cfg = settings or default_settings
        self.key_id = key_id if key_id is not None else cfg.key_id
        self.key_secret = key_secret if key_secret is not None else cfg.key_secret
        self.base_url = (base_url or cfg.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else cfg.timeout
        self.connect_attempts = max(1, connect_attempts if connect_attempts is not None else cfg.connect_attempts)

    @property
    def auth(self) -> Optional[tuple[str, str]]:
        if not self.key_id:
            return None
        return (self.key_id, self.key_secret or "")

    async def get(self, url: str, data: Optional[dict[str, Any]] = None) -> Any:
        return await self._send("GET", url, data)

    async def post(self, url: str, data: Optional[dict[str, Any]] = None) -> Any:
        return await self._send("POST", url, data)

    async def patch(self, url: str, data: dict[str, Any]) -> Any:
        return await self._send("PATCH", url, data)

    async def _send(self, method: str, path: str, data: Optional[dict[str, Any]]) -> Any:
        url = f"{self.base_url}{path}"
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(httpx.ConnectError),
            stop=stop_after_attempt(self.connect_attempts),
            wait=wait_exponential_jitter(1, 3),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    r = await self._request(method, url, data)
        except httpx.HTTPError as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise TransportError(f"{method} {url} failed: {e}", method=method, url=url) from e

        if r.status_code >= 400:
            _raise_with_context(r, method, url)
        try:
            return r.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON in response to {method} {url}",
                method=method,
                url=url,
                status_code=r.status_code,
                body=r.text,
            ) from e

    async def _request(self, method: str, url: str, data: Optional[dict[str, Any]]) -> httpx.Response:
        logger.info("%s %s", method, url)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            if method == "GET":
                params = _drop_none(data)
                if params:
                    logger.debug("Query params: %s", params)
                return await client.get(url, params=params, headers=_headers(), auth=self.auth)
            logger.debug("Payload sent: %s", json.dumps(data, indent=2, default=str))
            send = client.post if method == "POST" else client.patch
            return await send(url, json=data, headers=_headers(), auth=self.auth)
