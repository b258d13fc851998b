"""
Pytest fixtures shared by the unit tests.
Provides a fresh settings cache per test and a throwaway secp256k1 signer.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    decode_dss_signature,
)
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from wallet_permits.core.config import get_settings


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    """Settings are cached per process; isolate env overrides per test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class Secp256k1Signer:
    """Test-only wallet stand-in that signs raw 32-byte digests."""

    def __init__(self) -> None:
        self._private_key = ec.generate_private_key(ec.SECP256K1())

    @property
    def public_key(self) -> bytes:
        return self._private_key.public_key().public_bytes(
            Encoding.X962, PublicFormat.CompressedPoint
        )

    @property
    def uncompressed_public_key(self) -> bytes:
        return self._private_key.public_key().public_bytes(
            Encoding.X962, PublicFormat.UncompressedPoint
        )

    def sign_digest(self, digest: bytes) -> bytes:
        der = self._private_key.sign(digest, ec.ECDSA(Prehashed(hashes.SHA256())))
        r, s = decode_dss_signature(der)
        return r.to_bytes(32, "big") + s.to_bytes(32, "big")


@pytest.fixture
def signer() -> Secp256k1Signer:
    return Secp256k1Signer()


@pytest.fixture
def other_signer() -> Secp256k1Signer:
    return Secp256k1Signer()
