"""Cache-key digests.

xxhash for in-process keys, SHA256 when a digest must stay stable and
collision resistant across processes.
"""

import hashlib
from collections.abc import Callable
from enum import Enum

import xxhash


class Algorithm(str, Enum):
    XXHASH64 = "xxhash64"
    SHA256 = "sha256"


_DIGESTS: dict[Algorithm, Callable[[bytes], str]] = {
    Algorithm.XXHASH64: lambda data: xxhash.xxh64(data).hexdigest(),
    Algorithm.SHA256: lambda data: hashlib.sha256(data).hexdigest(),
}

# ("ab", "") and ("a", "b") must not share a key
FIELD_SEPARATOR = "\x00"


def hash_string(text: str, algorithm: Algorithm | str = Algorithm.XXHASH64, truncate: int | None = None) -> str:
    """
    Hex digest of ``text``, optionally cut to ``truncate`` characters.

    Raises:
        ValueError: Unknown algorithm
    """
    digest = _DIGESTS[Algorithm(algorithm)](text.encode("utf-8"))
    return digest[:truncate] if truncate else digest


def hash_fields(*fields: str | None, algorithm: Algorithm | str = Algorithm.XXHASH64) -> str:
    """Digest of several request fields; ``None`` hashes like ``""``."""
    return hash_string(FIELD_SEPARATOR.join(field or "" for field in fields), algorithm)


__all__ = ["Algorithm", "FIELD_SEPARATOR", "hash_string", "hash_fields"]
