"""Digest functions used by the signing schemes and address derivation."""

from __future__ import annotations

import hashlib

from Crypto.Hash import RIPEMD160, keccak

SHA256_DIGEST_SIZE = 32
RIPEMD160_DIGEST_SIZE = 20


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def keccak256(data: bytes) -> bytes:
    """Ethereum Keccak-256 (pre-NIST padding, not SHA3-256)."""
    return keccak.new(data=data, digest_bits=256).digest()


def ripemd160(data: bytes) -> bytes:
    return RIPEMD160.new(data=data).digest()
