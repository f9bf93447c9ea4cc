from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable

import httpx

from basestamp.errors import ProofNotAvailable, ProofTimeout, TransportFailure
from basestamp.models import Stamp

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 1.0


def _fetch_once(fetch: Callable[[str], Stamp], stamp_id: str) -> Stamp:
    try:
        return fetch(stamp_id)
    except TransportFailure:
        raise
    except (httpx.HTTPError, ValueError) as exc:
        raise TransportFailure(f"Failed to get merkle proof: {exc}") from exc


def poll_for_proof(
    fetch: Callable[[str], Stamp],
    stamp_id: str,
    *,
    wait: bool = False,
    timeout: float = 30.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Stamp:
    """Fetch *stamp_id* until its Merkle proof is present.

    Without *wait* a single fetch is made and a missing proof raises
    :class:`ProofNotAvailable`.  With *wait* up to ``ceil(timeout)``
    fetches are made, one :data:`POLL_INTERVAL_SECONDS` apart, before
    :class:`ProofTimeout` is raised.  Transport failures are raised
    immediately and never retried.
    """
    max_attempts = math.ceil(timeout) if wait else 1

    for attempt in range(max_attempts):
        if attempt:
            sleep(POLL_INTERVAL_SECONDS)
        stamp = _fetch_once(fetch, stamp_id)
        logger.debug(
            "Stamp %s attempt %d/%d: status=%s proof=%s",
            stamp_id, attempt + 1, max_attempts, stamp.status, stamp.has_proof,
        )
        if stamp.has_proof:
            return stamp
        if not wait:
            raise ProofNotAvailable("Merkle proof not yet available")

    logger.warning("No merkle proof for stamp %s after %d attempts", stamp_id, max_attempts)
    raise ProofTimeout(f"Timeout waiting for merkle proof after {timeout} seconds")
