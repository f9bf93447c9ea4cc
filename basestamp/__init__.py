"""Python client for the Basestamp timestamping service.

Proofs returned by the service are checked locally, so callers do not
have to trust the server:
- HTTP client for submitting hashes and fetching stamps.
- Merkle proof verification and the nonce/legacy leaf derivation.
- Bounded polling for proofs that are not ready yet.
"""

from __future__ import annotations

__all__ = [
    "BasestampClient",
    "BasestampError",
    "HashMismatch",
    "LeafHashMismatch",
    "MerkleProof",
    "MerkleTree",
    "ProofInvalid",
    "ProofNotAvailable",
    "ProofTimeout",
    "Stamp",
    "StampStatus",
    "TransportFailure",
    "VerificationError",
    "calculate_sha256",
    "is_valid_stamp",
    "poll_for_proof",
    "verify_merkle_proof",
    "verify_stamp",
]

from basestamp.client import BasestampClient
from basestamp.errors import (
    BasestampError,
    HashMismatch,
    LeafHashMismatch,
    ProofInvalid,
    ProofNotAvailable,
    ProofTimeout,
    TransportFailure,
    VerificationError,
)
from basestamp.hashing import calculate_sha256
from basestamp.merkle import MerkleTree, verify_merkle_proof
from basestamp.models import MerkleProof, Stamp, StampStatus
from basestamp.polling import poll_for_proof
from basestamp.verification import is_valid_stamp, verify_stamp
