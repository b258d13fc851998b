"""Viewing keys: shared secrets checked by comparing SHA-256 hashes."""

from __future__ import annotations

import hmac
from dataclasses import dataclass, field

from wallet_permits.core.crypto.hashing import SHA256_DIGEST_SIZE, sha256

VIEWING_KEY_HASH_SIZE = SHA256_DIGEST_SIZE


def hash_viewing_key(key: str) -> bytes:
    """Return ``SHA-256(key)`` over the UTF-8 encoded key."""
    return sha256(key.encode("utf-8"))


def compare_hashes(left: bytes, right: bytes) -> bool:
    """Constant-time equality of two stored hashes."""
    return hmac.compare_digest(left, right)


@dataclass(frozen=True)
class ViewingKey:
    """A caller-supplied viewing key. The secret is kept out of ``repr``."""

    key: str = field(repr=False)

    def hash(self) -> bytes:
        return hash_viewing_key(self.key)

    def compare(self, hashed: bytes) -> bool:
        return compare_hashes(self.hash(), hashed)
