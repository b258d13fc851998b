"""
Public key to chain address derivation.

The canonical address is ``RIPEMD-160(SHA-256(public_key))``; the human
address is its bech32 encoding under a chain-specific prefix.
"""

from __future__ import annotations

from wallet_permits.core.config import get_settings
from wallet_permits.core.crypto.bech32_codec import decode, encode
from wallet_permits.core.crypto.hashing import ripemd160, sha256
from wallet_permits.core.errors import AddressEncodingError

CANONICAL_ADDRESS_LENGTH = 20


def derive_canonical_address(public_key: bytes) -> bytes:
    """Return the 20-byte canonical address for a public key."""
    return ripemd160(sha256(public_key))


def canonical_to_human(canonical: bytes, prefix: str | None = None) -> str:
    """Bech32-encode canonical address bytes.

    ``prefix`` falls back to the configured ``address_default_prefix``.
    """
    hrp = prefix if prefix is not None else get_settings().address_default_prefix
    return encode(hrp, canonical)


def derive_human_address(public_key: bytes, prefix: str | None = None) -> str:
    """Return the bech32 address for a public key.

    Raises
    ------
    AddressEncodingError
        If ``prefix`` violates the bech32 human-readable-part rules.
    """
    return canonical_to_human(derive_canonical_address(public_key), prefix)


def bech32_to_canonical(address: str, *, expected_prefix: str | None = None) -> bytes:
    """Decode a bech32 address back to its canonical bytes.

    When ``expected_prefix`` is given, an address under any other prefix is
    rejected.
    """
    hrp, canonical = decode(address)
    if expected_prefix is not None and hrp != expected_prefix.lower():
        raise AddressEncodingError(
            f"Address prefix {hrp!r} does not match expected {expected_prefix!r}"
        )
    return canonical
