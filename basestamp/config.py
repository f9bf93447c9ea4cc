from __future__ import annotations

import os


def _get_str(name: str, default: str) -> str:
    val = os.getenv(name)
    if val is None or val.strip() == "":
        return default
    return val.strip()


def _get_float(name: str, default: float) -> float:
    val = os.getenv(name)
    if val is None or val == "":
        return default
    return float(val)


class Settings:
    base_url: str = _get_str("BASESTAMP_BASE_URL", "https://api.basestamp.io")

    # Per-request bound enforced by httpx
    request_timeout_s: float = _get_float("BASESTAMP_TIMEOUT", 30.0)

    # Default wait budget for get_merkle_proof(wait=True)
    proof_timeout_s: float = _get_float("BASESTAMP_PROOF_TIMEOUT", 30.0)


settings = Settings()
