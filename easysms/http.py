"""HTTP client shared by the built-in gateways.

Wraps one ``requests.Session`` so every gateway of a dispatcher reuses the
same connection pool. The client is injected into gateways, never looked up
globally.
"""

import json
from typing import Any, Dict, Optional

import requests
import structlog

from easysms.errors import HttpError

DEFAULT_TIMEOUT = 5.0


class HttpClient:
    """Thin JSON-over-HTTP client used by gateway adapters.

    Non-2xx responses are not raised: providers report their own error codes
    in the body, so the parsed body is returned for the gateway to inspect.
    Network failures and bodies that are not JSON objects raise HttpError.

    Args:
        session: Optional pre-configured requests.Session (proxies, retries).
        timeout: Default timeout in seconds when a call passes none.
        logger: Optional structlog logger.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        logger: Optional[Any] = None,
    ):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.logger = logger or structlog.get_logger()

    def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        response = self._request(
            "GET", url, params=params, headers=headers, timeout=timeout
        )
        return self._parse_json(response)

    def get_text(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> str:
        """GET a resource whose provider answers with plain text."""
        response = self._request(
            "GET", url, params=params, headers=headers, timeout=timeout
        )
        return response.text

    def post(
        self,
        url: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """POST a form-encoded body and parse the JSON response."""
        headers = dict(headers or {})
        headers.setdefault("Content-Type", "application/x-www-form-urlencoded")
        response = self._request(
            "POST", url, data=data, headers=headers, timeout=timeout
        )
        return self._parse_json(response)

    def post_json(
        self,
        url: str,
        payload: Any = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """POST a JSON body and parse the JSON response."""
        headers = dict(headers or {})
        headers.setdefault("Content-Type", "application/json")
        response = self._request(
            "POST", url, data=json.dumps(payload), headers=headers, timeout=timeout
        )
        return self._parse_json(response)

    def close(self) -> None:
        self.session.close()

    def _request(
        self, method: str, url: str, timeout: Optional[float] = None, **kwargs: Any
    ) -> requests.Response:
        try:
            return self.session.request(
                method, url, timeout=timeout or self.timeout, **kwargs
            )
        except requests.RequestException as e:
            self.logger.warning(
                "http_request_failed", method=method, url=url, error=str(e)
            )
            raise HttpError(f"{method} {url} failed: {e}", url=url) from e

    def _parse_json(self, response: requests.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError as e:
            raise HttpError(
                f"invalid JSON response (HTTP {response.status_code})",
                url=response.url,
                status_code=response.status_code,
            ) from e
        if not isinstance(body, dict):
            raise HttpError(
                f"unexpected JSON response type {type(body).__name__}",
                url=response.url,
                status_code=response.status_code,
            )
        return body
