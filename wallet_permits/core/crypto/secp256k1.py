"""
secp256k1 ECDSA verification over pre-computed 32-byte digests.

Uses the ``cryptography`` library. Signatures are the 64-byte compact
``r || s`` form produced by Cosmos wallets; public keys are SEC1 encoded
(33-byte compressed or 65-byte uncompressed). High-``s`` signatures are
normalised to low-``s`` before verification, matching the chain's own
verifier.
"""

from __future__ import annotations

from typing import Protocol

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    Prehashed,
    encode_dss_signature,
)

from wallet_permits.core.errors import MalformedInputError

SECP256K1_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141
_HALF_ORDER = SECP256K1_ORDER // 2

DIGEST_LENGTH = 32
SIGNATURE_LENGTH = 64
PUBLIC_KEY_LENGTHS = (33, 65)


class Secp256k1Verify(Protocol):
    """Verify primitive: ``True``/``False`` for a verdict, raises on bad input.

    Any exception raised by a primitive is reported by the verifier as
    :class:`MalformedInputError` and ends the scheme chain.
    """

    def __call__(self, digest: bytes, signature: bytes, public_key: bytes) -> bool: ...


def load_public_key(public_key: bytes) -> ec.EllipticCurvePublicKey:
    """Decode a SEC1 public key, rejecting anything that is not on the curve."""
    if len(public_key) not in PUBLIC_KEY_LENGTHS:
        raise MalformedInputError(
            f"secp256k1 public key must be 33 or 65 bytes, got {len(public_key)}"
        )
    try:
        return ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), public_key)
    except ValueError as exc:
        raise MalformedInputError("Public key is not a valid secp256k1 point") from exc


def split_signature(signature: bytes) -> tuple[int, int]:
    """Split a compact signature into ``(r, s)`` with ``s`` normalised low."""
    if len(signature) != SIGNATURE_LENGTH:
        raise MalformedInputError(
            f"secp256k1 signature must be {SIGNATURE_LENGTH} bytes, got {len(signature)}"
        )
    r = int.from_bytes(signature[:32], "big")
    s = int.from_bytes(signature[32:], "big")
    if not (0 < r < SECP256K1_ORDER and 0 < s < SECP256K1_ORDER):
        raise MalformedInputError("Signature scalars are out of range")
    if s > _HALF_ORDER:
        s = SECP256K1_ORDER - s
    return r, s


def check_inputs(signature: bytes, public_key: bytes) -> None:
    """Raise :class:`MalformedInputError` unless both inputs are well formed."""
    load_public_key(public_key)
    split_signature(signature)


def verify_secp256k1(digest: bytes, signature: bytes, public_key: bytes) -> bool:
    """Verify a compact secp256k1 signature over ``digest``.

    Parameters
    ----------
    digest:
        32-byte message digest; it is not hashed again.
    signature:
        64-byte ``r || s`` signature.
    public_key:
        SEC1 encoded public key.

    Returns
    -------
    bool
        ``True`` if the signature is valid for the key and digest.

    Raises
    ------
    MalformedInputError
        If any input is structurally invalid.
    """
    if len(digest) != DIGEST_LENGTH:
        raise MalformedInputError(f"Digest must be {DIGEST_LENGTH} bytes, got {len(digest)}")
    key = load_public_key(public_key)
    r, s = split_signature(signature)
    try:
        # Prehashed only checks the digest length; the digest may be Keccak-256.
        key.verify(
            encode_dss_signature(r, s),
            digest,
            ec.ECDSA(Prehashed(hashes.SHA256())),
        )
    except InvalidSignature:
        return False
    return True
