"""Low-level HTTP client for the Fulcrum REST API.

Handles the API token header, JSON decoding and HTTP operations.
"""
from __future__ import annotations
import logging
import os
from typing import Optional, Dict, Any

import requests

from ..exceptions import FulcrumAPIError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30
DEFAULT_API_URL = "https://api.fulcrumapp.com/api/v2"
DEFAULT_PHOTO_URL = "https://web.fulcrumapp.com/api/v2"


class FulcrumClient:
    """HTTP client for the Fulcrum REST API.

    Features:
    - X-ApiToken authentication, overridable per call
    - Centralized error handling
    - Tolerant JSON decoding for responses without a usable body

    Usage:
        client = FulcrumClient("my-api-token")
        response = client.get("/forms/abc-123")
    """

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        photo_url: Optional[str] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        """Initialize Fulcrum client.

        Args:
            api_key: API token provided by Fulcrum
            base_url: API base URL (defaults to FULCRUM_API_URL env var)
            photo_url: Host serving photo files (defaults to FULCRUM_PHOTO_URL env var)
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.base_url = (base_url or os.environ.get("FULCRUM_API_URL", DEFAULT_API_URL)).rstrip("/")
        self.photo_url = (photo_url or os.environ.get("FULCRUM_PHOTO_URL", DEFAULT_PHOTO_URL)).rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_config(cls, config) -> "FulcrumClient":
        """Build a client from a FulcrumConfig."""
        return cls(
            config.api_key,
            base_url=config.api_url,
            photo_url=config.photo_url,
            timeout=config.request_timeout,
        )

    def _headers(self, api_key: Optional[str] = None, extra: Optional[Dict] = None) -> Dict[str, str]:
        headers = dict(extra or {})
        headers["X-ApiToken"] = api_key or self.api_key
        headers.setdefault("Accept", "application/json")
        return headers

    def get(self, path: str, params: Optional[Dict] = None, api_key: Optional[str] = None, **kwargs) -> requests.Response:
        """Execute GET request.

        Args:
            path: API endpoint path (e.g., "/forms")
            params: Query parameters
            api_key: Token overriding the client token for this call
            **kwargs: Additional arguments for requests.get

        Returns:
            Response object

        Raises:
            FulcrumAPIError: On HTTP error
        """
        url = f"{self.base_url}{path}"
        headers = self._headers(api_key, kwargs.pop("headers", None))

        resp = requests.get(url, params=params, headers=headers, timeout=self.timeout, **kwargs)
        self._handle_error(resp)
        return resp

    def post(
        self,
        path: str,
        json: Optional[Dict] = None,
        data: Optional[Dict] = None,
        api_key: Optional[str] = None,
        **kwargs,
    ) -> requests.Response:
        """Execute POST request.

        Args:
            path: API endpoint path
            json: JSON payload
            data: Form data payload (multipart when combined with files=)
            api_key: Token overriding the client token for this call
            **kwargs: Additional arguments for requests.post

        Returns:
            Response object

        Raises:
            FulcrumAPIError: On HTTP error
        """
        url = f"{self.base_url}{path}"
        headers = self._headers(api_key, kwargs.pop("headers", None))

        resp = requests.post(url, json=json, data=data, headers=headers, timeout=self.timeout, **kwargs)
        self._handle_error(resp)
        return resp

    def put(self, path: str, json: Optional[Dict] = None, api_key: Optional[str] = None, **kwargs) -> requests.Response:
        """Execute PUT request.

        Args:
            path: API endpoint path
            json: JSON payload
            api_key: Token overriding the client token for this call
            **kwargs: Additional arguments for requests.put

        Returns:
            Response object

        Raises:
            FulcrumAPIError: On HTTP error
        """
        url = f"{self.base_url}{path}"
        headers = self._headers(api_key, kwargs.pop("headers", None))

        resp = requests.put(url, json=json, headers=headers, timeout=self.timeout, **kwargs)
        self._handle_error(resp)
        return resp

    def delete(self, path: str, api_key: Optional[str] = None, **kwargs) -> requests.Response:
        """Execute DELETE request.

        Args:
            path: API endpoint path
            api_key: Token overriding the client token for this call
            **kwargs: Additional arguments for requests.delete

        Returns:
            Response object

        Raises:
            FulcrumAPIError: On HTTP error
        """
        url = f"{self.base_url}{path}"
        headers = self._headers(api_key, kwargs.pop("headers", None))

        resp = requests.delete(url, headers=headers, timeout=self.timeout, **kwargs)
        self._handle_error(resp)
        return resp

    def download(self, path: str) -> Optional[bytes]:
        """Download a binary resource (photo, signature) with API credentials.

        Absolute URLs on the photo or API host are normalized to API paths.

        Args:
            path: Absolute URL or API-relative path

        Returns:
            Response body, or None when the body is empty
        """
        path = path.replace(self.photo_url, "").replace(self.base_url, "")
        if not path.startswith("/"):
            path = f"/{path}"
        resp = self.get(path, headers={"Accept": "*/*"})
        return resp.content or None

    def get_json(self, path: str, params: Optional[Dict] = None, missing_ok: bool = True) -> Optional[Dict[str, Any]]:
        """GET a JSON document.

        Args:
            path: API endpoint path
            params: Query parameters
            missing_ok: Return None instead of raising on HTTP 404

        Returns:
            Decoded body, or None when there is no usable payload

        Raises:
            FulcrumAPIError: On HTTP error (other than 404 when missing_ok)
        """
        try:
            resp = self.get(path, params=params)
        except FulcrumAPIError as exc:
            if missing_ok and exc.status_code == 404:
                logger.info("Fulcrum resource not found: %s", path)
                return None
            raise
        return self.parse_json(resp)

    @staticmethod
    def parse_json(resp: requests.Response) -> Optional[Dict[str, Any]]:
        """Decode a JSON object body, returning None when there is no usable payload."""
        if not resp.content:
            return None
        try:
            body = resp.json()
        except ValueError:
            logger.warning("Response from %s is not valid JSON", resp.url)
            return None
        if not isinstance(body, dict):
            logger.warning("Response from %s is not a JSON object", resp.url)
            return None
        return body

    def _handle_error(self, resp: requests.Response) -> None:
        """Centralized error handling for HTTP responses.

        Args:
            resp: Response object to check

        Raises:
            FulcrumAPIError: If response status indicates error
        """
        if resp.status_code >= 400:
            raise FulcrumAPIError(resp.status_code, resp.text, resp.url)
