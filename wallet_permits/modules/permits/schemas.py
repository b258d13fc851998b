"""
Pydantic schemas for permits and the transaction envelope wallets sign.

NOTE: field declaration order in ``SignedTx``, ``TxMsg``, ``Fee`` and
``Coin`` is the signing contract. The canonical encoder emits members in
declaration order, and wallets signed the alphabetical layout below. Do not
reorder, rename or add fields.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from wallet_permits.core.wire_types import Binary, Uint128

if TYPE_CHECKING:
    from wallet_permits.modules.permits.service import VerifiedIdentity

SECP256K1_PUBKEY_TYPE = "tendermint/PubKeySecp256k1"
DEFAULT_FEE_DENOM = "uscrt"
DEFAULT_FEE_GAS = 1

ParamsT = TypeVar("ParamsT")


# ---------------------------------------------------------------------------
# Permit (caller supplied)
# ---------------------------------------------------------------------------


class PubKey(BaseModel):
    """Amino-style public key wrapper."""

    # Only "tendermint/PubKeySecp256k1" keys can verify; other values decode
    # but fail signature checks.
    type: str = SECP256K1_PUBKEY_TYPE
    value: Binary

    model_config = ConfigDict(frozen=True)

    @classmethod
    def for_secp256k1(cls, value: bytes) -> PubKey:
        return cls(type=SECP256K1_PUBKEY_TYPE, value=Binary(value))


class PermitSignature(BaseModel):
    """Public key plus the 64-byte compact signature."""

    pub_key: PubKey
    signature: Binary

    model_config = ConfigDict(frozen=True)


class Permit(BaseModel, Generic[ParamsT]):
    """Application payload with a wallet signature over its envelope.

    Optional fields left as ``None`` are replaced with envelope defaults when
    the signed transaction is rebuilt.
    """

    params: ParamsT
    signature: PermitSignature
    account_number: Uint128 | None = None
    chain_id: str | None = None
    sequence: Uint128 | None = None
    memo: str | None = None

    model_config = ConfigDict(frozen=True)

    def create_signed_tx(self, message_type: str | None = None) -> SignedTx[ParamsT]:
        """Rebuild the envelope the wallet signed for this permit."""
        from wallet_permits.modules.permits.envelope import build_signed_tx

        return build_signed_tx(self, message_type)

    def verify(self, message_type: str | None = None) -> VerifiedIdentity:
        """Validate the signature and return the signer's identity."""
        from wallet_permits.modules.permits.service import validate_permit

        return validate_permit(self, message_type)


# ---------------------------------------------------------------------------
# Signed envelope (reconstructed)
# ---------------------------------------------------------------------------


class Coin(BaseModel):
    amount: Uint128 = Uint128(0)
    denom: str = DEFAULT_FEE_DENOM

    model_config = ConfigDict(frozen=True)


def _default_fee_amount() -> list[Coin]:
    return [Coin()]


class Fee(BaseModel):
    amount: list[Coin] = Field(default_factory=_default_fee_amount)
    gas: Uint128 = Uint128(DEFAULT_FEE_GAS)

    model_config = ConfigDict(frozen=True)


class TxMsg(BaseModel, Generic[ParamsT]):
    """Single message carrying the permit payload."""

    type: str
    value: ParamsT

    model_config = ConfigDict(frozen=True)


class SignedTx(BaseModel, Generic[ParamsT]):
    """Amino sign-doc layout. Every field except ``msgs`` is filler."""

    account_number: Uint128
    chain_id: str
    fee: Fee = Field(default_factory=Fee)
    memo: str
    msgs: list[TxMsg[ParamsT]]
    sequence: Uint128

    model_config = ConfigDict(frozen=True)


SIGNED_TX_FIELD_ORDER: tuple[str, ...] = (
    "account_number",
    "chain_id",
    "fee",
    "memo",
    "msgs",
    "sequence",
)
