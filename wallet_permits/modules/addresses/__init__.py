"""Chain address derivation from secp256k1 public keys."""

from wallet_permits.modules.addresses.service import (
    CANONICAL_ADDRESS_LENGTH,
    bech32_to_canonical,
    canonical_to_human,
    derive_canonical_address,
    derive_human_address,
)

__all__ = [
    "CANONICAL_ADDRESS_LENGTH",
    "bech32_to_canonical",
    "canonical_to_human",
    "derive_canonical_address",
    "derive_human_address",
]
