"""Rebuild the transaction envelope a wallet signed for a permit."""

from __future__ import annotations

from typing import Any

from wallet_permits.core.config import get_settings
from wallet_permits.core.wire_types import Uint128
from wallet_permits.modules.permits.schemas import Fee, Permit, SignedTx, TxMsg


def build_signed_tx(
    permit: Permit[Any],
    message_type: str | None = None,
    *,
    default_chain_id: str | None = None,
) -> SignedTx[Any]:
    """Wrap a permit's payload in the sign-doc envelope.

    Never fails: every optional permit field falls back to its default
    (``account_number=0``, configured chain id, ``memo=""``, ``sequence=0``)
    and the payload becomes the single message, typed ``message_type`` or the
    configured default type.

    Parameters
    ----------
    permit:
        The caller's permit; it is only read.
    message_type:
        Override for ``msgs[0].type``.
    default_chain_id:
        Chain id used when the permit has none; defaults to
        ``permit_default_chain_id`` from settings.
    """
    settings = get_settings()
    if default_chain_id is None:
        default_chain_id = settings.permit_default_chain_id
    if message_type is None:
        message_type = settings.permit_default_message_type

    return SignedTx[Any](
        account_number=_or_zero(permit.account_number),
        chain_id=permit.chain_id if permit.chain_id is not None else default_chain_id,
        fee=Fee(),
        memo=permit.memo if permit.memo is not None else "",
        msgs=[TxMsg[Any](type=message_type, value=permit.params)],
        sequence=_or_zero(permit.sequence),
    )


def _or_zero(value: Uint128 | None) -> Uint128:
    return value if value is not None else Uint128(0)
