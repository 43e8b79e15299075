"""Identifier derivation for short links.

An id is the first eight hex characters of the MD5 digest of the URL's
UTF-8 bytes. MD5 is used as a deterministic key generator only: two
different URLs that share a prefix collide, and the first one stored wins.
"""

import hashlib
from typing import Callable

ID_LENGTH = 8

# Anything mapping a URL to an id can stand in for derive_id in the stores.
Digest = Callable[[str], str]


def derive_id(original_url: str) -> str:
    """Return the 8-character lowercase hex id for ``original_url``."""
    return hashlib.md5(original_url.encode("utf-8"), usedforsecurity=False).hexdigest()[:ID_LENGTH]
