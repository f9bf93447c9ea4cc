from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest


REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from basestamp.hashing import calculate_sha256  # noqa: E402
from basestamp.merkle import MerkleTree  # noqa: E402

ORIGINAL_HASH = calculate_sha256("hello basestamp")
NONCE = "3f1c9a7e-5b2d-4e8f-9a6c-1d2e3f4a5b6c"


def _batch(leaf_hash: str, *, size: int = 4, index: int = 1) -> dict[str, Any]:
    """Build a batch of *size* leaves with *leaf_hash* at *index*."""
    leaves = [calculate_sha256(f"other-{i}") for i in range(size)]
    leaves[index] = leaf_hash
    tree = MerkleTree(leaves)
    return tree.get_proof(index).model_dump(mode="json")


@pytest.fixture()
def stamp_payload() -> Callable[..., dict[str, Any]]:
    """Factory for wire-format stamp records.

    ``nonce=""`` produces a legacy record whose leaf is the original
    hash; otherwise the leaf is ``sha256(nonce + original_hash)``.
    ``proof=False`` leaves ``merkle_proof`` out, as a pending stamp does.
    """

    def _make(
        *,
        stamp_id: str = "stamp-001",
        original_hash: str = ORIGINAL_HASH,
        nonce: str = NONCE,
        status: str = "confirmed",
        proof: bool = True,
        **overrides: Any,
    ) -> dict[str, Any]:
        data: dict[str, Any] = {
            "stamp_id": stamp_id,
            "hash": original_hash,
            "original_hash": original_hash,
            "nonce": nonce,
            "timestamp": "2026-01-01T00:00:00Z",
            "status": status,
        }
        if proof:
            leaf = calculate_sha256(nonce + original_hash) if nonce else original_hash
            data["merkle_proof"] = _batch(leaf)
        data.update(overrides)
        return data

    return _make
