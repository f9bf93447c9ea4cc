from __future__ import annotations

import hashlib

import pytest

from basestamp.hashing import calculate_sha256
from basestamp.merkle import EMPTY_ROOT, MerkleTree, hash_pair, verify_merkle_proof
from basestamp.models import MerkleProof

LEAF = "1b4f0e9851971998e732078544c96b36c3d01cedf7caa332359d6f1d83567014"
SIBLING = "60303ae22b998861bce3b28f33eec1be758a213c86c93c076dbe9f558c11c752"
ROOT = "587b1fe3afa386ce7cf9e99cf6f3b7f6a78a3c1ca6a549bbd467c992e482dc56"


def _leaves(n: int) -> list[str]:
    return [calculate_sha256(f"leaf-{i}") for i in range(n)]


def _proof(**overrides) -> MerkleProof:
    data = dict(leaf_hash=LEAF, leaf_index=0, siblings=[SIBLING], directions=[True], root_hash=ROOT)
    data.update(overrides)
    return MerkleProof(**data)


class TestHashPair:
    def test_orders_operands_by_value(self):
        a, b = sorted(_leaves(2))
        expected = hashlib.sha256(bytes.fromhex(a) + bytes.fromhex(b)).hexdigest()
        assert hash_pair(a, b) == expected
        assert hash_pair(b, a) == expected

    def test_commutative(self):
        leaves = _leaves(6)
        for a in leaves:
            for b in leaves:
                assert hash_pair(a, b) == hash_pair(b, a)

    def test_different_lengths_keep_argument_order(self):
        short = "abcd"
        expected = hashlib.sha256(bytes.fromhex(LEAF) + bytes.fromhex(short)).hexdigest()
        assert hash_pair(LEAF, short) == expected

    def test_non_hex_raises(self):
        with pytest.raises(ValueError):
            hash_pair(LEAF, "not-hex")


class TestVerifyMerkleProof:
    def test_reference_vector(self):
        assert verify_merkle_proof(_proof()) is True

    def test_wrong_root_fails(self):
        assert verify_merkle_proof(_proof(root_hash="invalid_root_hash")) is False
        assert verify_merkle_proof(_proof(root_hash=SIBLING)) is False

    def test_direction_bit_does_not_change_outcome(self):
        assert verify_merkle_proof(_proof(directions=[False])) is True

    def test_mismatched_lengths_fail(self):
        assert verify_merkle_proof(_proof(directions=[True, False])) is False
        assert verify_merkle_proof(_proof(siblings=[SIBLING, SIBLING])) is False
        assert verify_merkle_proof(_proof(siblings=[], directions=[True])) is False

    def test_none_fails(self):
        assert verify_merkle_proof(None) is False

    def test_empty_leaf_or_root_fails(self):
        assert verify_merkle_proof(_proof(leaf_hash="")) is False
        assert verify_merkle_proof(_proof(root_hash="")) is False

    def test_zero_siblings(self):
        assert verify_merkle_proof(_proof(siblings=[], directions=[], root_hash=LEAF)) is True
        assert verify_merkle_proof(_proof(siblings=[], directions=[], root_hash=ROOT)) is False

    def test_non_hex_path_returns_false(self):
        proof = _proof(
            leaf_hash="a1b2c3d4e5f6",
            siblings=["sibling1", "sibling2", "sibling3"],
            directions=[False, True, False],
            root_hash="expected_root",
        )
        assert verify_merkle_proof(proof) is False


class TestMerkleTree:
    def test_empty_tree(self):
        tree = MerkleTree()
        assert tree.root == EMPTY_ROOT
        assert tree.leaf_count == 0

    def test_single_leaf_root_is_leaf(self):
        tree = MerkleTree()
        root, idx = tree.append(LEAF)
        assert idx == 0
        assert root == LEAF
        proof = tree.get_proof(0)
        assert proof.siblings == ()
        assert proof.directions == ()
        assert verify_merkle_proof(proof)

    def test_two_leaves_match_reference_vector(self):
        tree = MerkleTree([LEAF, SIBLING])
        assert tree.root == ROOT

    def test_root_changes_on_each_append(self):
        tree = MerkleTree()
        roots = [tree.append(leaf)[0] for leaf in _leaves(5)]
        assert len(set(roots)) == 5

    @pytest.mark.parametrize("size", range(1, 10))
    def test_every_proof_verifies(self, size):
        leaves = _leaves(size)
        tree = MerkleTree(leaves)
        for i, leaf in enumerate(leaves):
            proof = tree.get_proof(i)
            assert proof.leaf_hash == leaf
            assert proof.leaf_index == i
            assert proof.root_hash == tree.root
            assert len(proof.siblings) == len(proof.directions)
            assert verify_merkle_proof(proof), f"leaf {i} of {size} failed verification"

    def test_flipped_directions_still_verify(self):
        tree = MerkleTree(_leaves(7))
        for i in range(7):
            proof = tree.get_proof(i)
            flipped = proof.model_copy(update={"directions": tuple(not d for d in proof.directions)})
            assert verify_merkle_proof(flipped)

    def test_proof_from_other_tree_fails(self):
        proof = MerkleTree(_leaves(4)).get_proof(2)
        other_root = MerkleTree(_leaves(5)).root
        assert not verify_merkle_proof(proof.model_copy(update={"root_hash": other_root}))

    def test_out_of_range_index_raises(self):
        tree = MerkleTree(_leaves(2))
        with pytest.raises(IndexError):
            tree.get_proof(5)
        with pytest.raises(IndexError):
            tree.get_proof(-1)

    def test_non_hex_leaf_rejected(self):
        tree = MerkleTree()
        with pytest.raises(ValueError, match="not hex"):
            tree.append("test-hash")
        assert tree.leaf_count == 0
