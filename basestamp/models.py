from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

from basestamp.leaf import DirectLeaf, LeafDerivation, leaf_derivation_for


class StampStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"


class MerkleProof(BaseModel):
    """Authentication path from a leaf hash up to an anchored root.

    Fields are parsed leniently: an empty or non-hex hash is kept as-is
    so that :func:`basestamp.merkle.verify_merkle_proof` can reject it.
    """

    model_config = ConfigDict(frozen=True)

    leaf_hash: str = ""
    leaf_index: int = Field(default=0, ge=0)
    siblings: tuple[str, ...] = ()
    directions: tuple[bool, ...] = ()
    root_hash: str = ""


class Stamp(BaseModel):
    """Read-only snapshot of a timestamped submission.

    ``merkle_proof`` is only present once the server has included the
    submission in an anchored batch.  The leaf-derivation mode is fixed
    from ``nonce`` at construction; an empty nonce means a legacy record
    whose leaf hash is the original hash itself.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    stamp_id: str
    hash: str = ""
    original_hash: str = ""
    nonce: str = ""
    status: str = StampStatus.PENDING.value
    timestamp: str | None = None
    message: str | None = None
    tx_id: str | None = None
    block_hash: str | None = None
    network: str | None = None
    chain_id: str | None = None
    merkle_proof: MerkleProof | None = None

    _leaf_mode: LeafDerivation = PrivateAttr(default_factory=DirectLeaf)

    @model_validator(mode="before")
    @classmethod
    def _fill_original_hash(cls, data: Any) -> Any:
        # Older servers only echo the submitted hash in ``hash``.
        if isinstance(data, dict) and not data.get("original_hash"):
            return {**data, "original_hash": data.get("hash") or ""}
        return data

    @field_validator("nonce", mode="before")
    @classmethod
    def _missing_nonce_is_legacy(cls, v: Any) -> Any:
        return "" if v is None else v

    def model_post_init(self, __context: Any) -> None:
        self._leaf_mode = leaf_derivation_for(self.nonce)

    @property
    def leaf_mode(self) -> LeafDerivation:
        return self._leaf_mode

    @property
    def is_legacy(self) -> bool:
        return isinstance(self._leaf_mode, DirectLeaf)

    @property
    def has_proof(self) -> bool:
        return self.merkle_proof is not None

    @property
    def is_confirmed(self) -> bool:
        return self.status == StampStatus.CONFIRMED

    def expected_leaf_hash(self) -> str:
        return self._leaf_mode.expected_leaf(self.original_hash)

    def verify(self, hash_value: str) -> bool:
        """Return ``True`` when this stamp proves *hash_value*."""
        from basestamp.verification import is_valid_stamp

        return is_valid_stamp(self, hash_value)

    def check(self, hash_value: str) -> None:
        """Like :meth:`verify` but raise the specific failure."""
        from basestamp.verification import verify_stamp

        verify_stamp(self, hash_value)
