from __future__ import annotations

import hashlib


def calculate_sha256(data: bytes | str) -> str:
    """Return the lowercase hex SHA-256 of *data* (``str`` is UTF-8 encoded)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()
