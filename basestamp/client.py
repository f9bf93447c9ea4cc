from __future__ import annotations

import json
import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import ValidationError

from basestamp.config import settings
from basestamp.errors import TransportFailure
from basestamp.models import Stamp
from basestamp.polling import poll_for_proof
from basestamp.types import BatchStats, CalendarResponse, HealthResponse, ServerInfo

logger = logging.getLogger(__name__)


def _join(base_url: str, path: str) -> str:
    return base_url.rstrip("/") + "/" + path.lstrip("/")


@dataclass
class BasestampClient:
    """Synchronous client for the Basestamp REST API."""

    base_url: str = field(default_factory=lambda: settings.base_url)
    timeout_s: float = field(default_factory=lambda: settings.request_timeout_s)
    default_headers: dict[str, str] = field(default_factory=dict)
    transport: httpx.BaseTransport | None = None
    sleep: Callable[[float], None] = time.sleep

    def _headers(self) -> dict[str, str]:
        h: dict[str, str] = {**self.default_headers}
        h["Content-Type"] = "application/json"
        h["X-Request-Id"] = f"req_{uuid.uuid4().hex[:12]}"
        return h

    def _request(self, method: str, path: str, payload: dict[str, Any] | None = None) -> Any:
        url = _join(self.base_url, path)
        body = json.dumps(payload).encode("utf-8") if payload is not None else None
        headers = self._headers()
        logger.debug("%s %s (%s)", method, url, headers["X-Request-Id"])
        try:
            with httpx.Client(timeout=self.timeout_s, transport=self.transport) as c:
                r = c.request(method, url, content=body, headers=headers)
                r.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise TransportFailure(
                f"Server returned error: {status} {exc.response.reason_phrase}",
                status_code=status,
            ) from exc
        except httpx.TimeoutException as exc:
            raise TransportFailure("Request timeout") from exc
        except httpx.HTTPError as exc:
            raise TransportFailure(f"Request failed: {exc}") from exc

        try:
            return r.json()
        except ValueError as exc:
            raise TransportFailure(f"Invalid JSON response: {exc}", status_code=r.status_code) from exc

    # --- Stamps ---

    def timestamp(self, hash_value: str) -> CalendarResponse:
        """Submit *hash_value* for timestamping."""
        return self._request("POST", "/stamp", {"hash": hash_value})

    def get_stamp(self, stamp_id: str) -> Stamp:
        data = self._request("GET", f"/stamp/{stamp_id}")
        try:
            return Stamp.model_validate(data)
        except ValidationError as exc:
            raise TransportFailure(f"Malformed stamp record: {exc}") from exc

    def get_merkle_proof(self, stamp_id: str, wait: bool = False, timeout: float | None = None) -> Stamp:
        """Return the stamp once its Merkle proof is available.

        With ``wait=True`` the stamp is polled once a second for up to
        *timeout* seconds (``settings.proof_timeout_s`` by default).
        """
        if timeout is None:
            timeout = settings.proof_timeout_s
        stamp = poll_for_proof(self.get_stamp, stamp_id, wait=wait, timeout=timeout, sleep=self.sleep)
        if stamp.is_legacy:
            logger.warning(
                "Server response for stamp %s is missing a nonce; using legacy verification mode",
                stamp_id,
            )
        return stamp

    def verify_stamp(self, stamp_id: str, hash_value: str | None = None) -> bool:
        """Fetch *stamp_id* and verify it against *hash_value*.

        Defaults to the stamp's own ``original_hash``.  Raises
        :class:`ProofNotAvailable` when the proof is not ready yet.
        """
        stamp = self.get_merkle_proof(stamp_id)
        return stamp.verify(hash_value or stamp.original_hash)

    # --- Service ---

    def info(self) -> ServerInfo:
        return self._request("GET", "/info")

    def health(self) -> HealthResponse:
        return self._request("GET", "/health")

    def batch_stats(self) -> BatchStats:
        return self._request("GET", "/batch/stats")
