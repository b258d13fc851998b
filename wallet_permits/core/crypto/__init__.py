"""
Cryptographic primitives for permit verification.

Pure library modules:
- **canonicalization**: compact and pretty canonical JSON signing bytes
- **hashing**: SHA-256, Keccak-256 and RIPEMD-160 digests
- **secp256k1**: ECDSA verification over 32-byte digests
- **bech32_codec**: bech32 address encoding and decoding
"""

from wallet_permits.core.crypto.bech32_codec import (
    decode as bech32_decode,
    encode as bech32_encode,
    validate_hrp,
)
from wallet_permits.core.crypto.canonicalization import (
    canonical_json_bytes,
    pretty_canonical_json_bytes,
)
from wallet_permits.core.crypto.hashing import keccak256, ripemd160, sha256
from wallet_permits.core.crypto.secp256k1 import (
    Secp256k1Verify,
    check_inputs,
    verify_secp256k1,
)

__all__ = [
    "canonical_json_bytes",
    "pretty_canonical_json_bytes",
    "sha256",
    "keccak256",
    "ripemd160",
    "Secp256k1Verify",
    "check_inputs",
    "verify_secp256k1",
    "bech32_encode",
    "bech32_decode",
    "validate_hrp",
]
