"""Verification of a stamp against a candidate content hash.

:func:`verify_stamp` is the single verification path.  Checks run in a
fixed order and stop at the first failure:

1. the stamp carries a Merkle proof (:class:`ProofNotAvailable`),
2. the candidate equals the stamp's original hash (:class:`HashMismatch`),
3. the leaf derived from the stamp's mode equals the proof's leaf hash
   (:class:`LeafHashMismatch`),
4. the authentication path reproduces the root hash (:class:`ProofInvalid`).

:func:`is_valid_stamp` is the boolean form of the same check.
"""

from __future__ import annotations

import logging

from basestamp.errors import (
    HashMismatch,
    LeafHashMismatch,
    ProofInvalid,
    ProofNotAvailable,
    VerificationError,
)
from basestamp.merkle import verify_merkle_proof
from basestamp.models import Stamp

logger = logging.getLogger(__name__)


def verify_stamp(stamp: Stamp, candidate_hash: str) -> None:
    proof = stamp.merkle_proof
    if proof is None:
        raise ProofNotAvailable(f"Merkle proof not yet available for stamp {stamp.stamp_id}")

    if candidate_hash != stamp.original_hash:
        raise HashMismatch(
            f"hash {candidate_hash!r} does not match original hash {stamp.original_hash!r}"
        )

    expected_leaf = stamp.expected_leaf_hash()
    if expected_leaf != proof.leaf_hash:
        raise LeafHashMismatch(
            f"expected {stamp.leaf_mode.name} leaf hash {expected_leaf!r}, "
            f"proof has {proof.leaf_hash!r}"
        )

    if not verify_merkle_proof(proof):
        raise ProofInvalid(f"Merkle path does not reproduce root hash {proof.root_hash!r}")


def is_valid_stamp(stamp: Stamp, candidate_hash: str) -> bool:
    try:
        verify_stamp(stamp, candidate_hash)
    except (ProofNotAvailable, VerificationError) as exc:
        logger.debug("Stamp %s failed verification: %s", stamp.stamp_id, exc)
        return False
    return True
