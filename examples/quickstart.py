from __future__ import annotations

import sys

from basestamp import BasestampClient, BasestampError, calculate_sha256


def main() -> int:
    # Uses BASESTAMP_BASE_URL when set, otherwise the public service.
    client = BasestampClient()

    content = " ".join(sys.argv[1:]) or "hello basestamp"
    content_hash = calculate_sha256(content)
    print("Content hash:", content_hash)

    ack = client.timestamp(content_hash)
    print("Submitted:", ack)

    stamp_id = ack.get("stamp_id")
    if not stamp_id:
        print("Server did not return a stamp id; nothing to poll.")
        return 1

    try:
        stamp = client.get_merkle_proof(stamp_id, wait=True, timeout=120)
    except BasestampError as exc:
        print("Proof not retrieved:", exc)
        return 1

    print("Stamp status:", stamp.status, "tx:", stamp.tx_id)
    print("Merkle root:", stamp.merkle_proof.root_hash)

    try:
        stamp.check(content_hash)
    except BasestampError as exc:
        print("Verification FAILED:", type(exc).__name__, exc)
        return 1

    print("Verified: content is included under the anchored root.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
