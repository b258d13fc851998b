"""Wallet-signed permits: envelope reconstruction and signature validation."""

from wallet_permits.modules.permits.envelope import build_signed_tx
from wallet_permits.modules.permits.schemas import (
    SECP256K1_PUBKEY_TYPE,
    Coin,
    Fee,
    Permit,
    PermitSignature,
    PubKey,
    SignedTx,
    TxMsg,
)
from wallet_permits.modules.permits.service import (
    VerifiedIdentity,
    validate_permit,
    validate_signed_tx,
)
from wallet_permits.modules.permits.verification import (
    DEFAULT_SCHEMES,
    DIRECT_SCHEME,
    PERSONAL_SIGN_SCHEME,
    PermitSignatureVerifier,
    SignatureScheme,
    verify_signed_tx,
)

__all__ = [
    "SECP256K1_PUBKEY_TYPE",
    "Coin",
    "Fee",
    "Permit",
    "PermitSignature",
    "PubKey",
    "SignedTx",
    "TxMsg",
    "build_signed_tx",
    "VerifiedIdentity",
    "validate_permit",
    "validate_signed_tx",
    "DEFAULT_SCHEMES",
    "DIRECT_SCHEME",
    "PERSONAL_SIGN_SCHEME",
    "PermitSignatureVerifier",
    "SignatureScheme",
    "verify_signed_tx",
]
