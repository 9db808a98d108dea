"""Fast hashing for non-cryptographic use cases.

Digests feed identity suffixes, so the same input always produces the same
output across runs and machines.
"""

import xxhash


def hash_string(text: str, truncate: int | None = None) -> str:
    """
    Hash string to an xxhash64 hex digest.

    Args:
        text: String to hash
        truncate: Optional length to truncate digest (e.g., 6 for identity suffixes)

    Returns:
        Hex digest string

    Examples:
        >>> len(hash_string("view-1", truncate=6))
        6
    """
    digest = xxhash.xxh64(text.encode("utf-8")).hexdigest()

    if truncate:
        return digest[:truncate]
    return digest


__all__ = ["hash_string"]
