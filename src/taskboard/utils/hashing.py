"""Hashing utilities for cache key generation."""

import hashlib
import json
from typing import Any


def hash_value(value: Any) -> str:
    """Create a deterministic hash of a value.

    Args:
        value: Any JSON-serializable value.

    Returns:
        A hexadecimal hash string (first 16 chars of SHA-256).
    """
    if value is None:
        return "none"

    # Normalize to JSON with sorted keys for determinism
    normalized = json.dumps(value, sort_keys=True, default=str)
    return hashlib.sha256(normalized.encode()).hexdigest()[:16]


def normalize_term(term: str) -> str:
    """Normalize a search term so equivalent searches share a cache key.

    Only case is folded, matching the case-insensitive search the store
    performs. Whitespace is part of the term and kept as typed.

    Args:
        term: The raw search term.

    Returns:
        The case-folded term.
    """
    return term.casefold()
