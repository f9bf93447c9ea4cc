"""Leaf-hash derivation modes.

A stamp's leaf hash is either the submitted content hash itself (legacy
records, no nonce) or the SHA-256 of ``nonce + original_hash`` taken as
text.  The mode is chosen once per stamp by :func:`leaf_derivation_for`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Union

from basestamp.hashing import calculate_sha256


@dataclass(frozen=True)
class DirectLeaf:
    name: ClassVar[str] = "legacy"

    def expected_leaf(self, original_hash: str) -> str:
        return original_hash


@dataclass(frozen=True)
class NoncedLeaf:
    nonce: str
    name: ClassVar[str] = "nonce"

    def expected_leaf(self, original_hash: str) -> str:
        return calculate_sha256(self.nonce + original_hash)


LeafDerivation = Union[DirectLeaf, NoncedLeaf]


def leaf_derivation_for(nonce: str | None) -> LeafDerivation:
    if nonce:
        return NoncedLeaf(nonce)
    return DirectLeaf()
