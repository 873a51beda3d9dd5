import json
from pathlib import Path

from walletauth_sdk.canonical import canonical_bytes, canonicalize
from walletauth_sdk.crypto import sha256_hex


def test_shared_canonical_vectors_match_python_sdk() -> None:
    vectors_dir = Path(__file__).resolve().parents[3] / "shared-test-vectors" / "canonical"
    vector_files = sorted(vectors_dir.glob("*.json"))
    assert vector_files

    for vector_file in vector_files:
        vector = json.loads(vector_file.read_text(encoding="utf-8"))
        canonical = canonicalize(vector["input"])
        digest = sha256_hex(canonical_bytes(vector["input"]))

        assert canonical == vector["expected"]["canonical_json"], vector_file.name
        assert digest == vector["expected"]["sha256_hex"], vector_file.name
