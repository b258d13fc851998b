"""Tests for permit decoding and signed envelope reconstruction."""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from wallet_permits.core.crypto.canonicalization import (
    canonical_json_bytes,
    pretty_canonical_json_bytes,
)
from wallet_permits.core.wire_types import Binary, Uint128
from wallet_permits.modules.permits import (
    SECP256K1_PUBKEY_TYPE,
    Coin,
    Fee,
    Permit,
    PermitSignature,
    PubKey,
    SignedTx,
    TxMsg,
    build_signed_tx,
)
from wallet_permits.modules.permits.schemas import SIGNED_TX_FIELD_ORDER

ADDRESS = "secret102nasmxnxvwp5agc4lp3flc6s23335xm8g7gn9"
PUBKEY = "A0qzJ3s16OKUfn1KFyh533vBnBOQIT0jm+R/FBobJCfa"
SIGNATURE = "4pZtghyHKHHmwiGNC5JD8JxCJiO+44j6GqaLPc19Q7lt85tr0IRZHYcnc0pkokIds8otxU9rcuvPXb0+etLyVA=="


class PermitMsg(BaseModel):
    address: str
    some_number: Uint128


def _permit(**overrides: object) -> Permit[PermitMsg]:
    fields: dict[str, object] = {
        "params": PermitMsg(address=ADDRESS, some_number=Uint128(10)),
        "signature": PermitSignature(
            pub_key=PubKey.for_secp256k1(Binary.from_base64(PUBKEY)),
            signature=Binary.from_base64(SIGNATURE),
        ),
        "chain_id": "pulsar-1",
    }
    fields.update(overrides)
    return Permit[PermitMsg](**fields)


class TestFieldOrder:
    """Envelope member order is part of the signing contract."""

    def test_signed_tx(self) -> None:
        assert tuple(SignedTx.model_fields) == SIGNED_TX_FIELD_ORDER

    def test_nested_models(self) -> None:
        assert tuple(TxMsg.model_fields) == ("type", "value")
        assert tuple(Fee.model_fields) == ("amount", "gas")
        assert tuple(Coin.model_fields) == ("amount", "denom")


class TestBuildSignedTx:
    def test_defaults(self) -> None:
        permit = _permit(chain_id=None)
        signed_tx = build_signed_tx(permit)
        assert signed_tx.account_number == 0
        assert signed_tx.chain_id == "secret-4"
        assert signed_tx.memo == ""
        assert signed_tx.sequence == 0
        assert signed_tx.fee.gas == 1
        assert signed_tx.fee.amount == [Coin(amount=Uint128(0), denom="uscrt")]
        assert len(signed_tx.msgs) == 1
        assert signed_tx.msgs[0].type == "signature_proof"
        assert signed_tx.msgs[0].value is permit.params

    def test_explicit_fields_win(self) -> None:
        permit = _permit(
            account_number=Uint128(203289),
            sequence=Uint128(4),
            memo="b64Encoded",
        )
        signed_tx = build_signed_tx(permit, "wasm/MsgExecuteContract")
        assert signed_tx.account_number == 203289
        assert signed_tx.sequence == 4
        assert signed_tx.memo == "b64Encoded"
        assert signed_tx.chain_id == "pulsar-1"
        assert signed_tx.msgs[0].type == "wasm/MsgExecuteContract"

    def test_default_chain_id_argument(self) -> None:
        signed_tx = build_signed_tx(_permit(chain_id=None), default_chain_id="secret-3")
        assert signed_tx.chain_id == "secret-3"

    def test_configured_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PERMIT_DEFAULT_CHAIN_ID", "pulsar-3")
        monkeypatch.setenv("PERMIT_DEFAULT_MESSAGE_TYPE", "query_permit")
        signed_tx = build_signed_tx(_permit(chain_id=None))
        assert signed_tx.chain_id == "pulsar-3"
        assert signed_tx.msgs[0].type == "query_permit"

    def test_permit_is_not_mutated(self) -> None:
        permit = _permit(chain_id=None)
        before = permit.model_dump()
        permit.create_signed_tx()
        assert permit.model_dump() == before
        assert permit.chain_id is None

    def test_compact_bytes(self) -> None:
        assert canonical_json_bytes(build_signed_tx(_permit())) == (
            b'{"account_number":"0","chain_id":"pulsar-1",'
            b'"fee":{"amount":[{"amount":"0","denom":"uscrt"}],"gas":"1"},'
            b'"memo":"","msgs":[{"type":"signature_proof","value":'
            b'{"address":"secret102nasmxnxvwp5agc4lp3flc6s23335xm8g7gn9","some_number":"10"}}],'
            b'"sequence":"0"}'
        )

    def test_pretty_bytes(self) -> None:
        pretty = pretty_canonical_json_bytes(build_signed_tx(_permit()), "    ")
        assert pretty.decode("utf-8") == (
            "{\n"
            '    "account_number": "0",\n'
            '    "chain_id": "pulsar-1",\n'
            '    "fee": {\n'
            '        "amount": [\n'
            "            {\n"
            '                "amount": "0",\n'
            '                "denom": "uscrt"\n'
            "            }\n"
            "        ],\n"
            '        "gas": "1"\n'
            "    },\n"
            '    "memo": "",\n'
            '    "msgs": [\n'
            "        {\n"
            '            "type": "signature_proof",\n'
            '            "value": {\n'
            f'                "address": "{ADDRESS}",\n'
            '                "some_number": "10"\n'
            "            }\n"
            "        }\n"
            "    ],\n"
            '    "sequence": "0"\n'
            "}"
        )

    def test_deterministic(self) -> None:
        first = canonical_json_bytes(build_signed_tx(_permit()))
        second = canonical_json_bytes(build_signed_tx(_permit()))
        assert first == second

    def test_dict_params_match_model_params(self) -> None:
        """Wire-decoded params keep their quoted numbers."""
        decoded = Permit.model_validate_json(
            '{"params": {"address": "%s", "some_number": "10"},'
            ' "signature": {"pub_key": {"type": "tendermint/PubKeySecp256k1", "value": "%s"},'
            ' "signature": "%s"}, "chain_id": "pulsar-1"}' % (ADDRESS, PUBKEY, SIGNATURE)
        )
        assert canonical_json_bytes(build_signed_tx(decoded)) == canonical_json_bytes(
            build_signed_tx(_permit())
        )


class TestPermitDecoding:
    def test_optional_fields_absent(self) -> None:
        permit = Permit.model_validate_json(
            '{"params": {}, "signature": {"pub_key": {"type": "%s", "value": "%s"},'
            ' "signature": "%s"}}' % (SECP256K1_PUBKEY_TYPE, PUBKEY, SIGNATURE)
        )
        assert permit.account_number is None
        assert permit.chain_id is None
        assert permit.sequence is None
        assert permit.memo is None
        assert len(permit.signature.pub_key.value) == 33
        assert len(permit.signature.signature) == 64

    def test_other_key_type_still_decodes(self) -> None:
        permit = Permit.model_validate(
            {
                "params": {},
                "signature": {
                    "pub_key": {"type": "ethermint/PubKeyEthSecp256k1", "value": PUBKEY},
                    "signature": SIGNATURE,
                },
            }
        )
        assert permit.signature.pub_key.type == "ethermint/PubKeyEthSecp256k1"

    def test_quoted_integers_decode(self) -> None:
        permit = Permit.model_validate(
            {
                "params": {},
                "signature": {"pub_key": {"value": PUBKEY}, "signature": SIGNATURE},
                "account_number": "203289",
                "sequence": "0",
            }
        )
        assert permit.account_number == Uint128(203289)
        assert permit.sequence == 0
        assert permit.signature.pub_key.type == SECP256K1_PUBKEY_TYPE

    def test_pretty_permit(self) -> None:
        pretty = pretty_canonical_json_bytes(_permit(), "    ").decode("utf-8")
        assert pretty == (
            "{\n"
            '    "params": {\n'
            f'        "address": "{ADDRESS}",\n'
            '        "some_number": "10"\n'
            "    },\n"
            '    "signature": {\n'
            '        "pub_key": {\n'
            '            "type": "tendermint/PubKeySecp256k1",\n'
            f'            "value": "{PUBKEY}"\n'
            "        },\n"
            f'        "signature": "{SIGNATURE}"\n'
            "    },\n"
            '    "account_number": null,\n'
            '    "chain_id": "pulsar-1",\n'
            '    "sequence": null,\n'
            '    "memo": null\n'
            "}"
        )
