"""
HTTP client for the Kiho worktime punch API.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from puncher.config import PuncherConfig, RuntimeSettings
from puncher.constants import USER_AGENT
from puncher.errors import ApiError, classify_exception, classify_status
from puncher.punch import PunchType

logger = logging.getLogger(__name__)


def _headers(api_key: str, with_body: bool = False) -> dict[str, str]:
    headers = {
        "Authorization": api_key,
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
    }
    # GET requests are rejected by the API when Content-Type is set
    if with_body:
        headers["Content-Type"] = "application/json"
    return headers


def latest_query(count: int, punch_type: Optional[PunchType] = None) -> dict[str, str]:
    params = {
        "orderBy": "timestamp DESC",
        "pageSize": str(count),
    }
    if punch_type is not None:
        params["type"] = punch_type.value
    return params


class PunchClient:
    """
    Single-shot GET/POST calls against the punch endpoint.

    In dry-run mode requests are logged but never sent and the calls
    return None.
    """

    def __init__(self, config: PuncherConfig, settings: Optional[RuntimeSettings] = None):
        self.url = config.api.url
        self.timeout = config.api.timeout_s
        self.api_key = config.api_key
        self.settings = settings or RuntimeSettings()

    def _request(self, method: str, **kwargs: Any) -> Optional[dict[str, Any]]:
        logger.debug(f"{method} {self.url} params={kwargs.get('params')} json={kwargs.get('json')}")
        if self.settings.dry_run:
            logger.info(f"DRY RUN - Skipping HTTP {method} and response processing")
            return None
        try:
            response = requests.request(method, self.url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            error = classify_exception(exc)
            raise ApiError(
                f"HTTP {method} failed: {error.message}",
                category=error.category,
            ) from exc

        logger.info(f"HTTP response: {response.status_code}")
        logger.debug(f"Response headers: {dict(response.headers)}")
        if not response.ok:
            raise ApiError(
                f"HTTP {method} returned {response.status_code}: {response.text[:500]}",
                status_code=response.status_code,
                category=classify_status(response.status_code),
                body=response.text,
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise ApiError(f"Failed to parse JSON response: {exc}") from exc
        if not isinstance(data, dict):
            raise ApiError(f"Unexpected JSON response: {data!r}")
        logger.debug(f"Response JSON: {data}")
        return data

    def latest(self, count: int, punch_type: Optional[PunchType] = None) -> Optional[list[dict[str, Any]]]:
        """Latest `count` punch lines, newest first as returned by the API."""
        data = self._request(
            "GET",
            params=latest_query(count, punch_type),
            headers=_headers(self.api_key),
        )
        if data is None:
            return None
        result = data.get("result")
        if not isinstance(result, list):
            raise ApiError("Failed to parse `result` from the returned JSON")
        return result

    def post(self, body: dict[str, Any]) -> Optional[dict[str, Any]]:
        """Create a new punch line; returns the created line."""
        data = self._request(
            "POST",
            json=body,
            headers=_headers(self.api_key, with_body=True),
        )
        if data is None:
            return None
        result = data.get("result")
        if not isinstance(result, dict):
            raise ApiError("Failed to parse `result` from the returned JSON")
        return result
