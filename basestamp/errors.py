from __future__ import annotations


class BasestampError(Exception):
    """Base class for every error raised by the Basestamp client."""


class TransportFailure(BasestampError):
    """The request/response cycle with the Basestamp service failed.

    Wraps network errors, non-2xx responses, per-request timeouts and
    bodies that cannot be decoded.  The underlying exception is chained
    as ``__cause__``.
    """

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ProofNotAvailable(BasestampError):
    """The stamp has no Merkle proof yet."""


class ProofTimeout(BasestampError):
    """Polling for a Merkle proof exhausted its attempt budget."""


class VerificationError(BasestampError):
    """A proof was available but does not prove the candidate hash."""


class HashMismatch(VerificationError):
    """The candidate hash differs from the stamp's ``original_hash``."""


class LeafHashMismatch(VerificationError):
    """The expected leaf hash differs from the proof's ``leaf_hash``."""


class ProofInvalid(VerificationError):
    """The authentication path does not reproduce ``root_hash``."""
