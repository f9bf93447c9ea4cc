from __future__ import annotations

from collections.abc import Iterable

from basestamp.hashing import calculate_sha256
from basestamp.models import MerkleProof

EMPTY_ROOT = "0" * 64


def hash_pair(left: str, right: str) -> str:
    """Combine two hex hashes into their parent hash.

    Equal-length operands are ordered by hex value before hashing, so
    ``hash_pair(a, b) == hash_pair(b, a)``.  Operands of different
    length are concatenated as given.  Raises ``ValueError`` when either
    operand is not valid hex.
    """
    left_bytes = bytes.fromhex(left)
    right_bytes = bytes.fromhex(right)
    if len(left_bytes) == len(right_bytes) and right < left:
        left_bytes, right_bytes = right_bytes, left_bytes
    return calculate_sha256(left_bytes + right_bytes)


def verify_merkle_proof(proof: MerkleProof | None) -> bool:
    """Recompute the root from *proof* and compare it to ``root_hash``.

    Never raises: a missing proof, an empty leaf or root hash, a
    siblings/directions length mismatch or undecodable hex all yield
    ``False``.

    ``directions[i]`` is true when the sibling sits on the right.  Since
    :func:`hash_pair` orders its operands by value, the bit does not
    change the outcome; it is honoured here so the walk matches the
    wire format.
    """
    if proof is None:
        return False
    if not proof.leaf_hash or not proof.root_hash:
        return False
    if len(proof.siblings) != len(proof.directions):
        return False

    current = proof.leaf_hash
    try:
        for sibling, sibling_on_right in zip(proof.siblings, proof.directions):
            if sibling_on_right:
                current = hash_pair(current, sibling)
            else:
                current = hash_pair(sibling, current)
    except ValueError:
        return False
    return current == proof.root_hash


class MerkleTree:
    """Append-only, in-memory Merkle tree over hex leaf hashes.

    Internal nodes are built with :func:`hash_pair`.  A node without a
    right neighbour is paired with itself, so every level above the
    leaves has ``ceil(n / 2)`` nodes.
    """

    def __init__(self, leaves: Iterable[str] = ()) -> None:
        self._levels: list[list[str]] = [[]]
        for leaf_hash in leaves:
            self.append(leaf_hash)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def root(self) -> str:
        count = self.leaf_count
        if count == 0:
            return EMPTY_ROOT
        return self._compute_root(count)

    @property
    def leaf_count(self) -> int:
        return len(self._levels[0])

    def append(self, leaf_hash: str) -> tuple[str, int]:
        """Append *leaf_hash* and return ``(new_root_hash, leaf_index)``."""
        try:
            bytes.fromhex(leaf_hash)
        except ValueError:
            raise ValueError(f"leaf hash is not hex: {leaf_hash!r}") from None
        position = self.leaf_count
        self._store_node(0, position, leaf_hash)

        new_count = position + 1
        self._rebuild_path(position, new_count)
        return self._compute_root(new_count), position

    def get_proof(self, leaf_index: int) -> MerkleProof:
        """Return the authentication path for *leaf_index*."""
        count = self.leaf_count
        if leaf_index < 0 or leaf_index >= count:
            raise IndexError(f"leaf index {leaf_index} out of range [0, {count})")

        siblings: list[str] = []
        directions: list[bool] = []
        level = 0
        pos = leaf_index
        n = count

        while n > 1:
            if pos % 2 == 0:
                sibling_pos = pos + 1
                sibling_on_right = True
            else:
                sibling_pos = pos - 1
                sibling_on_right = False

            if sibling_pos < n:
                siblings.append(self._get_node(level, sibling_pos))
            else:
                siblings.append(self._get_node(level, pos))
            directions.append(sibling_on_right)

            pos //= 2
            n = (n + 1) // 2
            level += 1

        return MerkleProof(
            leaf_hash=self._get_node(0, leaf_index),
            leaf_index=leaf_index,
            siblings=siblings,
            directions=directions,
            root_hash=self.root,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _store_node(self, level: int, position: int, h: str) -> None:
        if level == len(self._levels):
            self._levels.append([])
        nodes = self._levels[level]
        if position == len(nodes):
            nodes.append(h)
        else:
            nodes[position] = h

    def _get_node(self, level: int, position: int) -> str:
        return self._levels[level][position]

    def _rebuild_path(self, position: int, count: int) -> None:
        """Recompute internal nodes along the path from *position* to root."""
        level = 0
        n = count
        pos = position

        while n > 1:
            parent_pos = pos // 2
            left_pos = parent_pos * 2
            right_pos = left_pos + 1

            left_hash = self._get_node(level, left_pos)
            if right_pos < n:
                right_hash = self._get_node(level, right_pos)
            else:
                right_hash = left_hash

            self._store_node(level + 1, parent_pos, hash_pair(left_hash, right_hash))

            pos = parent_pos
            n = (n + 1) // 2
            level += 1

    def _compute_root(self, count: int) -> str:
        level = 0
        n = count
        while n > 1:
            n = (n + 1) // 2
            level += 1
        return self._get_node(level, 0)
