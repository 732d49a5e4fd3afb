"""Hashing for render cache keys.

A cache key is a pair of digests: one of the note text, one of the
RenderConfig that rendered it.

Example:
    >>> from notemark.utils.hashing import hash_str
    >>> hash_str("hello", truncate=16)
    '2cf24dba5fb0a30e'
"""

import hashlib
from dataclasses import fields
from typing import Any


def hash_str(
    content: str,
    truncate: int | None = None,
    algorithm: str = "sha256",
) -> str:
    """Return the hex digest of content, optionally truncated.

    Args:
        content: Text to hash (UTF-8 encoded first)
        truncate: Keep only the first N hex characters (None = full digest)
        algorithm: Any name ``hashlib.new`` accepts
    """
    digest = hashlib.new(algorithm, content.encode("utf-8")).hexdigest()
    return digest if truncate is None else digest[:truncate]


def hash_fields(obj: Any, truncate: int | None = None) -> str:
    """Digest a dataclass instance from its type name and field values.

    Field values are hashed through ``repr``, which is stable for the str,
    bool and None values a RenderConfig holds.
    """
    parts = [type(obj).__name__]
    parts.extend(f"{f.name}={getattr(obj, f.name)!r}" for f in fields(obj))
    return hash_str("|".join(parts), truncate=truncate)
