"""
Scalar wire types shared by permit schemas and the canonical encoder.

Wallets sign 128-bit integers as quoted decimal strings and byte strings as
base64, so these wrappers carry that representation through pydantic
validation and canonical encoding.
"""

from __future__ import annotations

import base64
import binascii
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

UINT128_MAX = 2**128 - 1
INT128_MIN = -(2**127)
INT128_MAX = 2**127 - 1


def _parse_decimal(value: Any, *, allow_negative: bool) -> int:
    if isinstance(value, bool):
        raise ValueError("Booleans are not integers on the wire")
    if isinstance(value, int):
        return int(value)
    if isinstance(value, str):
        digits = value[1:] if allow_negative and value.startswith("-") else value
        if not digits or not (digits.isascii() and digits.isdigit()):
            raise ValueError(f"Invalid decimal integer string: {value!r}")
        return int(value)
    raise ValueError(f"Expected an integer or decimal string, got {type(value).__name__}")


class Uint128(int):
    """Unsigned 128-bit integer, quoted as a decimal string on the wire."""

    def __new__(cls, value: Any = 0) -> Uint128:
        number = _parse_decimal(value, allow_negative=False)
        if not 0 <= number <= UINT128_MAX:
            raise ValueError(f"Value out of range for Uint128: {number}")
        return super().__new__(cls, number)

    def __repr__(self) -> str:
        return f"Uint128({int(self)})"

    def __str__(self) -> str:
        return str(int(self))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


class Int128(int):
    """Signed 128-bit integer, quoted as a decimal string on the wire."""

    def __new__(cls, value: Any = 0) -> Int128:
        number = _parse_decimal(value, allow_negative=True)
        if not INT128_MIN <= number <= INT128_MAX:
            raise ValueError(f"Value out of range for Int128: {number}")
        return super().__new__(cls, number)

    def __repr__(self) -> str:
        return f"Int128({int(self)})"

    def __str__(self) -> str:
        return str(int(self))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )


class Binary(bytes):
    """Byte string that travels as standard padded base64."""

    @classmethod
    def from_base64(cls, encoded: str) -> Binary:
        try:
            return cls(base64.b64decode(encoded, validate=True))
        except binascii.Error as exc:
            raise ValueError(f"Invalid base64 data: {exc}") from exc

    def to_base64(self) -> str:
        return base64.b64encode(self).decode("ascii")

    def __repr__(self) -> str:
        return f"Binary({self.to_base64()!r})"

    @classmethod
    def _coerce(cls, value: Any) -> Binary:
        if isinstance(value, cls):
            return value
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls(value)
        if isinstance(value, str):
            return cls.from_base64(value)
        raise ValueError(f"Expected base64 string or bytes, got {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._coerce,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda value: value.to_base64()
            ),
        )
