"""
Permit validation.

Rebuilds the signed envelope, verifies the signature against the public key
the permit *asserts*, and on success returns that key as a
:class:`VerifiedIdentity`. Keys are never recovered from the signature; the
derived address only means something once verification has succeeded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from wallet_permits.core.errors import MalformedInputError, SignatureInvalidError
from wallet_permits.core.logging import get_logger
from wallet_permits.modules.addresses.service import (
    derive_canonical_address,
    derive_human_address,
)
from wallet_permits.modules.permits.envelope import build_signed_tx
from wallet_permits.modules.permits.schemas import Permit, PermitSignature, SignedTx
from wallet_permits.modules.permits.verification import PermitSignatureVerifier

logger = get_logger(__name__)


@dataclass(frozen=True)
class VerifiedIdentity:
    """Public key of a permit signer whose signature has been verified.

    Attributes
    ----------
    public_key:
        SEC1 encoded secp256k1 public key taken from the permit.
    scheme:
        Name of the signing scheme that accepted the signature.
    """

    public_key: bytes
    scheme: str

    def canonical_address(self) -> bytes:
        return derive_canonical_address(self.public_key)

    def human_address(self, prefix: str | None = None) -> str:
        return derive_human_address(self.public_key, prefix)


def validate_signed_tx(
    signature: PermitSignature,
    signed_tx: SignedTx[Any],
    *,
    verifier: PermitSignatureVerifier | None = None,
) -> VerifiedIdentity:
    """Verify ``signature`` over an already-built envelope."""
    verifier = verifier or PermitSignatureVerifier()
    public_key = bytes(signature.pub_key.value)

    try:
        scheme = verifier.verify(public_key, bytes(signature.signature), signed_tx)
    except MalformedInputError as exc:
        logger.warning("permit_input_malformed", reason=str(exc))
        raise
    except SignatureInvalidError as exc:
        logger.warning(
            "permit_signature_rejected",
            signer=derive_canonical_address(public_key).hex(),
            pub_key_type=signature.pub_key.type,
            chain_id=signed_tx.chain_id,
            message_type=signed_tx.msgs[0].type if signed_tx.msgs else None,
            last_scheme=exc.scheme,
        )
        raise

    return VerifiedIdentity(public_key=public_key, scheme=scheme.name)


def validate_permit(
    permit: Permit[Any],
    message_type: str | None = None,
    *,
    verifier: PermitSignatureVerifier | None = None,
) -> VerifiedIdentity:
    """Validate a permit and return the verified signer.

    Parameters
    ----------
    permit:
        Caller-owned permit; it is never modified.
    message_type:
        Override for the envelope message type (default
        ``"signature_proof"``).
    verifier:
        Custom scheme chain or primitive; defaults to direct then
        personal-sign over the ``cryptography`` secp256k1 primitive.

    Raises
    ------
    MalformedInputError
        Structurally invalid key or signature bytes.
    SignatureInvalidError
        No scheme accepted the signature.
    """
    signed_tx = build_signed_tx(permit, message_type)
    return validate_signed_tx(permit.signature, signed_tx, verifier=verifier)
