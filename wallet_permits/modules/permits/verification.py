"""
Signature schemes and the ordered fallback verifier.

Different wallet ecosystems sign different byte framings of the same
envelope. Each framing is a :class:`SignatureScheme` that turns the envelope
into a 32-byte digest; the verifier walks the schemes in order and stops at
the first one whose digest the signature verifies against. New wallet
conventions are added by appending a scheme.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from wallet_permits.core.crypto.canonicalization import (
    canonical_json_bytes,
    pretty_canonical_json_bytes,
)
from wallet_permits.core.crypto.hashing import keccak256, sha256
from wallet_permits.core.crypto.secp256k1 import (
    Secp256k1Verify,
    check_inputs,
    verify_secp256k1,
)
from wallet_permits.core.errors import MalformedInputError, SignatureInvalidError
from wallet_permits.core.logging import get_logger
from wallet_permits.modules.permits.schemas import SignedTx

logger = get_logger(__name__)

PERSONAL_SIGN_PREFIX = b"\x19Ethereum Signed Message:\n"
PERSONAL_SIGN_INDENT = "    "


@dataclass(frozen=True)
class SignatureScheme:
    """A wallet signing convention: envelope in, 32-byte digest out."""

    name: str
    digest: Callable[[SignedTx[Any]], bytes]


def direct_sign_bytes(signed_tx: SignedTx[Any]) -> bytes:
    """Compact canonical JSON of the envelope."""
    return canonical_json_bytes(signed_tx)


def direct_sign_digest(signed_tx: SignedTx[Any]) -> bytes:
    return sha256(direct_sign_bytes(signed_tx))


def personal_sign_message(signed_tx: SignedTx[Any]) -> bytes:
    """Build the ``personal_sign`` framing of the 4-space pretty envelope.

    ``"\\x19Ethereum Signed Message:\\n" + len(pretty) + pretty`` where the
    length is ASCII decimal.
    """
    pretty = pretty_canonical_json_bytes(signed_tx, PERSONAL_SIGN_INDENT)
    return PERSONAL_SIGN_PREFIX + str(len(pretty)).encode("ascii") + pretty


def personal_sign_digest(signed_tx: SignedTx[Any]) -> bytes:
    return keccak256(personal_sign_message(signed_tx))


DIRECT_SCHEME = SignatureScheme(name="direct", digest=direct_sign_digest)
PERSONAL_SIGN_SCHEME = SignatureScheme(name="personal_sign", digest=personal_sign_digest)

# Priority order; the first scheme that verifies wins.
DEFAULT_SCHEMES: tuple[SignatureScheme, ...] = (DIRECT_SCHEME, PERSONAL_SIGN_SCHEME)


class PermitSignatureVerifier:
    """Check a permit signature against each scheme in priority order."""

    def __init__(
        self,
        schemes: Sequence[SignatureScheme] = DEFAULT_SCHEMES,
        primitive: Secp256k1Verify = verify_secp256k1,
    ) -> None:
        if not schemes:
            raise ValueError("At least one signature scheme is required")
        self._schemes = tuple(schemes)
        self._primitive = primitive

    @property
    def schemes(self) -> tuple[SignatureScheme, ...]:
        return self._schemes

    def verify(
        self,
        public_key: bytes,
        signature: bytes,
        signed_tx: SignedTx[Any],
    ) -> SignatureScheme:
        """Return the first scheme under which ``signature`` is valid.

        Raises
        ------
        MalformedInputError
            If the key or signature bytes are structurally invalid, or the
            verify primitive errors. No further scheme is tried in that case.
        SignatureInvalidError
            If every scheme rejects the signature. Carries the name of the
            last scheme attempted.
        """
        check_inputs(signature, public_key)

        for scheme in self._schemes:
            digest = scheme.digest(signed_tx)
            try:
                accepted = self._primitive(digest, signature, public_key)
            except MalformedInputError:
                raise
            except Exception as exc:
                raise MalformedInputError(
                    f"secp256k1 verification errored under {scheme.name} scheme"
                ) from exc

            if accepted:
                logger.debug(
                    "permit_signature_verified",
                    scheme=scheme.name,
                    chain_id=signed_tx.chain_id,
                )
                return scheme
            logger.debug("permit_scheme_rejected", scheme=scheme.name)

        last = self._schemes[-1].name
        raise SignatureInvalidError(
            f"Signature verification failed (last scheme tried: {last})",
            scheme=last,
        )


def verify_signed_tx(
    public_key: bytes,
    signature: bytes,
    signed_tx: SignedTx[Any],
) -> SignatureScheme:
    """Verify with the default schemes and the default secp256k1 primitive."""
    return PermitSignatureVerifier().verify(public_key, signature, signed_tx)
