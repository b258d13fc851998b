"""
Bech32 codec helpers.

Thin wrapper over the reference ``bech32`` implementation that adds
human-readable-prefix validation and 8-bit/5-bit regrouping, and maps every
failure onto :class:`AddressEncodingError`.
"""

from __future__ import annotations

from bech32 import bech32_decode, bech32_encode, convertbits

from wallet_permits.core.errors import AddressEncodingError

# BIP-173 limits
MAX_ADDRESS_LENGTH = 90
MAX_HRP_LENGTH = 83


def validate_hrp(hrp: str) -> str:
    """Check a human-readable prefix against the bech32 rules.

    Returns the prefix unchanged so it can be used inline in validators.
    """
    if not hrp or len(hrp) > MAX_HRP_LENGTH:
        raise AddressEncodingError(
            f"Bech32 prefix must be 1-{MAX_HRP_LENGTH} characters, got {len(hrp)}"
        )
    if any(ord(ch) < 33 or ord(ch) > 126 for ch in hrp):
        raise AddressEncodingError(f"Bech32 prefix contains invalid characters: {hrp!r}")
    if hrp.lower() != hrp and hrp.upper() != hrp:
        raise AddressEncodingError(f"Bech32 prefix must not mix case: {hrp!r}")
    return hrp


def encode(hrp: str, data: bytes) -> str:
    """Encode raw bytes as a bech32 string with the given prefix."""
    validate_hrp(hrp)
    words = convertbits(data, 8, 5, True)
    if words is None:
        raise AddressEncodingError("Unable to regroup data into 5-bit words")
    address = bech32_encode(hrp.lower(), words)
    if len(address) > MAX_ADDRESS_LENGTH:
        raise AddressEncodingError(
            f"Bech32 string exceeds {MAX_ADDRESS_LENGTH} characters ({len(address)})"
        )
    return address


def decode(address: str) -> tuple[str, bytes]:
    """Decode a bech32 string into ``(hrp, raw_bytes)``."""
    hrp, words = bech32_decode(address)
    if hrp is None or words is None:
        raise AddressEncodingError(f"Invalid bech32 string: {address!r}")
    data = convertbits(words, 5, 8, False)
    if data is None:
        raise AddressEncodingError(f"Invalid bech32 padding: {address!r}")
    return hrp, bytes(data)
