"""Retrying REST client and the industry backend built on it."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

import requests

from pyqt_industry.config import IndustryApiConfig
from pyqt_industry.errors import BackendError, BackendTransportError, PayloadError
from pyqt_industry.protocols.industry_protocol import (
    CATEGORY_KEY,
    NAME_KEY,
    PARENT_KEY,
    IndustryBackendABC,
    IndustryRecord,
)

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class ApiClient:
    """Thin JSON client over a ``requests.Session`` with retry on 5xx/transport errors.

    2xx and 4xx responses are returned immediately. 5xx responses are retried
    up to ``retries`` times and the last response is returned. Transport
    errors are retried and re-raised after the final attempt.
    """

    def __init__(
        self,
        base_url: str,
        *,
        retries: int = 3,
        retry_delay_seconds: float = 1.0,
        timeout_seconds: float = 15.0,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.retries = retries
        self.retry_delay_seconds = retry_delay_seconds
        self.timeout_seconds = timeout_seconds
        self._session = session if session is not None else requests.Session()
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: IndustryApiConfig, **kwargs: Any) -> "ApiClient":
        return cls(
            config.base_url,
            retries=config.retries,
            retry_delay_seconds=config.retry_delay_seconds,
            timeout_seconds=config.timeout_seconds,
            **kwargs,
        )

    def request(self, method: str, endpoint: str, *, json: Any = None) -> requests.Response:
        url = f"{self.base_url}{endpoint}"
        for attempt in range(self.retries + 1):
            try:
                response = self._session.request(
                    method,
                    url,
                    json=json,
                    headers=JSON_HEADERS,
                    timeout=self.timeout_seconds,
                )
            except requests.RequestException as exc:
                if attempt < self.retries:
                    logger.warning(
                        "Network error on %s %s, retrying in %.1fs (attempt %d/%d): %s",
                        method, endpoint, self.retry_delay_seconds, attempt + 1, self.retries, exc,
                    )
                    self._sleep(self.retry_delay_seconds)
                    continue
                raise

            if response.status_code < 500:
                return response

            if attempt < self.retries:
                logger.warning(
                    "API call %s %s failed (%d), retrying in %.1fs (attempt %d/%d)",
                    method, endpoint, response.status_code,
                    self.retry_delay_seconds, attempt + 1, self.retries,
                )
                self._sleep(self.retry_delay_seconds)
                continue
            return response

        raise RuntimeError("Max retries exceeded")

    def get(self, endpoint: str) -> requests.Response:
        return self.request("GET", endpoint)

    def post(self, endpoint: str, data: Any = None) -> requests.Response:
        return self.request("POST", endpoint, json=data)

    def put(self, endpoint: str, data: Any = None) -> requests.Response:
        return self.request("PUT", endpoint, json=data)

    def delete(self, endpoint: str) -> requests.Response:
        return self.request("DELETE", endpoint)


def extract_error_detail(response: requests.Response) -> str:
    """Server detail message when parseable, else body text, else reason."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        detail = payload.get("detail") or payload.get("message")
        if detail:
            return str(detail)
    text = response.text
    if text:
        return text
    return response.reason or "Unknown server error"


class IndustryApiBackend(IndustryBackendABC):
    """``IndustryBackendABC`` over the ``/industries`` REST endpoints."""

    LIST_ENDPOINT = "/industries/"
    ITEM_ENDPOINT = "/industries/{node_id}"
    LEGACY_RENAME_ENDPOINT = "/industries/update/{node_id}"
    REPARENT_ENDPOINT = "/industries/update-parent"

    def __init__(self, client: ApiClient, *, legacy_rename_fallback: bool = True) -> None:
        self._client = client
        self._legacy_rename_fallback = legacy_rename_fallback

    @classmethod
    def from_config(cls, config: IndustryApiConfig) -> "IndustryApiBackend":
        return cls(
            ApiClient.from_config(config),
            legacy_rename_fallback=config.legacy_rename_fallback,
        )

    def list_industries(self) -> List[IndustryRecord]:
        response = self._send("GET", self.LIST_ENDPOINT, "Failed to fetch industries")
        payload = self._json(response)
        if not isinstance(payload, list):
            raise PayloadError("Industry list response must be a JSON array")
        return [IndustryRecord.from_payload(item) for item in payload]

    def create_industry(
        self, name: str, category: str, parent_id: Optional[int]
    ) -> IndustryRecord:
        body = {NAME_KEY: name, CATEGORY_KEY: category, PARENT_KEY: parent_id}
        response = self._send("POST", self.LIST_ENDPOINT, "Add industry failed", body)
        return self._record_or_fallback(response, body)

    def rename_industry(self, node_id: int, name: str) -> IndustryRecord:
        body = {NAME_KEY: name}
        endpoint = self.ITEM_ENDPOINT.format(node_id=node_id)
        response = self._request("PUT", endpoint, body)
        if response.status_code == 404 and self._legacy_rename_fallback:
            logger.info("Rename of %s returned 404, trying legacy endpoint", node_id)
            response = self._request(
                "PUT", self.LEGACY_RENAME_ENDPOINT.format(node_id=node_id), body
            )
        self._raise_for_status(response, "Failed to rename industry")
        return self._record_or_fallback(response, {"id": node_id, NAME_KEY: name})

    def delete_industry(self, node_id: int) -> None:
        self._send("DELETE", self.ITEM_ENDPOINT.format(node_id=node_id), "Delete failed")

    def reparent_industry(self, node_id: int, new_parent_id: Optional[int]) -> None:
        body: Dict[str, Any] = {"id": node_id, "new_parent_id": new_parent_id}
        self._send("POST", self.REPARENT_ENDPOINT, "Move failed", body)

    def _request(self, method: str, endpoint: str, body: Any = None) -> requests.Response:
        try:
            return self._client.request(method, endpoint, json=body)
        except requests.RequestException as exc:
            raise BackendTransportError(f"Network error: {exc}") from exc

    def _send(self, method: str, endpoint: str, failure: str, body: Any = None) -> requests.Response:
        response = self._request(method, endpoint, body)
        self._raise_for_status(response, failure)
        return response

    @staticmethod
    def _raise_for_status(response: requests.Response, failure: str) -> None:
        if response.ok:
            return
        raise BackendError(
            failure,
            status_code=response.status_code,
            detail=extract_error_detail(response),
        )

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise PayloadError(f"Backend returned invalid JSON: {exc}") from exc

    @staticmethod
    def _record_or_fallback(response: requests.Response, sent: Dict[str, Any]) -> IndustryRecord:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and "id" in payload:
            return IndustryRecord.from_payload(payload)
        # Empty write responses echo the request body.
        return IndustryRecord(
            id=sent.get("id", -1),
            name=sent.get(NAME_KEY, ""),
            category=sent.get(CATEGORY_KEY, "") or "",
            parent_id=sent.get(PARENT_KEY),
        )
