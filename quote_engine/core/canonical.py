"""
Canonical serialization for deterministic hashing.

State fingerprints go through these functions so the same rule set always
produces the same bytes.
"""

import hashlib
import json
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Convert arbitrary nested dict/list to canonical form.

    Rules:
    - dict keys sorted alphabetically
    - tuples converted to lists
    - sets and frozensets converted to sorted lists
    - recursive normalization
    """
    if isinstance(obj, dict):
        return {k: canonicalize(obj[k]) for k in sorted(obj.keys())}
    if isinstance(obj, (set, frozenset)):
        return sorted(canonicalize(x) for x in obj)
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic JSON bytes for hashing.

    Returns:
        UTF-8 encoded JSON bytes
    """
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    """Same guarantees as canonical_json_bytes but returns string."""
    return canonical_json_bytes(obj).decode("utf-8")


def compute_state_hash(state) -> str:
    """
    SHA-256 of the canonical state document.

    Equal event logs give equal hashes.
    """
    return hashlib.sha256(canonical_json_bytes(state.to_dict())).hexdigest()
