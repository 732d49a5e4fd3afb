"""Small helpers shared by the renderer modules.

- hashing: hash_str for render cache keys
- logger: get_logger / set_log_level for the ``notemark`` logger tree
"""

from notemark.utils.hashing import hash_fields, hash_str
from notemark.utils.logger import get_logger, set_log_level

__all__ = [
    "get_logger",
    "hash_fields",
    "hash_str",
    "set_log_level",
]
