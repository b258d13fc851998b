"""Viewing key hashing and comparison."""

from wallet_permits.modules.viewing_keys.service import (
    VIEWING_KEY_HASH_SIZE,
    ViewingKey,
    compare_hashes,
    hash_viewing_key,
)

__all__ = [
    "VIEWING_KEY_HASH_SIZE",
    "ViewingKey",
    "compare_hashes",
    "hash_viewing_key",
]
