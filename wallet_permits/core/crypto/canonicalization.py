"""
Canonical JSON encoding for wallet signing payloads.

Wallets sign a byte-exact JSON rendering of the transaction envelope, so the
encoder here must reproduce it exactly:

- object members are emitted in **declaration order** (model / dataclass
  field order, mapping insertion order), never sorted;
- strings are minimal-length UTF-8 with the canonical escape table
  (``\\\\``, ``\\"``, ``\\b``, ``\\t``, ``\\n``, ``\\f``, ``\\r`` and
  ``\\u00XX`` for the remaining control characters);
- 128-bit integers are quoted decimal strings;
- ``None`` is ``null`` and is never omitted;
- floats, raw bytes and other shapes raise :class:`UnsupportedValueError`.

Two layouts share the same rules. *Compact* output has no whitespace at all
and is the direct signing payload. *Pretty* output inserts a newline plus the
indent repeated by nesting depth before every member/element, and ``": "``
after keys.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, RootModel

from wallet_permits.core.errors import UnsupportedValueError
from wallet_permits.core.wire_types import Binary, Int128, Uint128

# Integers outside this window lose precision in common JSON consumers and
# are rendered like the 128-bit wire types.
_BARE_INT_MIN = -(2**63)
_BARE_INT_MAX = 2**64 - 1
_QUOTED_INT_MIN = -(2**127)
_QUOTED_INT_MAX = 2**128 - 1

_ESCAPES: dict[int, str] = {code: f"\\u{code:04X}" for code in range(0x20)}
_ESCAPES.update(
    {
        ord("\\"): "\\\\",
        ord('"'): '\\"',
        0x08: "\\b",
        0x09: "\\t",
        0x0A: "\\n",
        0x0C: "\\f",
        0x0D: "\\r",
    }
)


def _escape_string(value: str) -> bytes:
    try:
        return b'"' + value.translate(_ESCAPES).encode("utf-8") + b'"'
    except UnicodeEncodeError as exc:
        raise UnsupportedValueError(f"String is not valid Unicode: {value!r}") from exc


class _CanonicalWriter:
    """Single-use writer; one instance per encode call."""

    def __init__(self, indent: bytes | None) -> None:
        self._indent = indent
        self._depth = 0
        self._buf = bytearray()

    def getvalue(self) -> bytes:
        return bytes(self._buf)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _newline(self) -> None:
        if self._indent is not None:
            self._buf += b"\n"
            self._buf += self._indent * self._depth

    def _write_object(self, items: Iterable[tuple[str, Any]]) -> None:
        self._buf += b"{"
        self._depth += 1
        first = True
        for key, value in items:
            if not isinstance(key, str):
                raise UnsupportedValueError(
                    f"Object keys must be strings, got {type(key).__name__}"
                )
            if not first:
                self._buf += b","
            first = False
            self._newline()
            self._buf += _escape_string(key)
            self._buf += b": " if self._indent is not None else b":"
            self.write(value)
        self._depth -= 1
        if not first:
            self._newline()
        self._buf += b"}"

    def _write_array(self, values: Iterable[Any]) -> None:
        self._buf += b"["
        self._depth += 1
        first = True
        for value in values:
            if not first:
                self._buf += b","
            first = False
            self._newline()
            self.write(value)
        self._depth -= 1
        if not first:
            self._newline()
        self._buf += b"]"

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    def _write_int(self, value: int) -> None:
        number = int(value)
        if isinstance(value, (Uint128, Int128)) or not (
            _BARE_INT_MIN <= number <= _BARE_INT_MAX
        ):
            if not _QUOTED_INT_MIN <= number <= _QUOTED_INT_MAX:
                raise UnsupportedValueError(f"Integer exceeds 128 bits: {number}")
            self._buf += b'"' + str(number).encode("ascii") + b'"'
            return
        self._buf += str(number).encode("ascii")

    def write(self, value: Any) -> None:
        if value is None:
            self._buf += b"null"
        elif isinstance(value, Enum):
            self.write(value.value)
        elif isinstance(value, bool):
            self._buf += b"true" if value else b"false"
        elif isinstance(value, int):
            self._write_int(value)
        elif isinstance(value, float):
            raise UnsupportedValueError("Floating point values cannot be signed")
        elif isinstance(value, str):
            self._buf += _escape_string(value)
        elif isinstance(value, Binary):
            self._buf += _escape_string(value.to_base64())
        elif isinstance(value, (bytes, bytearray, memoryview)):
            raise UnsupportedValueError("Raw bytes are not encodable; wrap them in Binary")
        elif isinstance(value, RootModel):
            self.write(value.root)
        elif isinstance(value, BaseModel):
            self._write_object(_model_items(value))
        elif dataclasses.is_dataclass(value) and not isinstance(value, type):
            self._write_object(
                (field.name, getattr(value, field.name))
                for field in dataclasses.fields(value)
            )
        elif isinstance(value, Mapping):
            self._write_object(value.items())
        elif isinstance(value, (list, tuple)):
            self._write_array(value)
        else:
            raise UnsupportedValueError(
                f"Unsupported value for canonical JSON: {type(value).__name__}"
            )


def _model_items(model: BaseModel) -> Iterable[tuple[str, Any]]:
    """Yield ``(wire_name, value)`` pairs in field declaration order."""
    for name, info in type(model).model_fields.items():
        key = info.serialization_alias or info.alias or name
        yield key, getattr(model, name)


def _normalize_indent(indent: str | bytes) -> bytes:
    raw = indent.encode("ascii") if isinstance(indent, str) else bytes(indent)
    if raw.strip(b" \t"):
        raise ValueError(f"Indent must consist of spaces or tabs, got {indent!r}")
    return raw


def canonical_json_bytes(data: Any) -> bytes:
    """Return compact canonical JSON bytes.

    Parameters
    ----------
    data:
        Any supported value: pydantic models, dataclasses, ``str``-keyed
        mappings, lists/tuples, strings, integers, booleans, ``None``,
        enums and the :mod:`wire_types` scalars.

    Returns
    -------
    bytes
        UTF-8 encoded JSON without insignificant whitespace.

    Raises
    ------
    UnsupportedValueError
        If ``data`` contains a value that has no canonical representation.
    """
    writer = _CanonicalWriter(indent=None)
    writer.write(data)
    return writer.getvalue()


def pretty_canonical_json_bytes(data: Any, indent: str | bytes = "  ") -> bytes:
    """Return indented canonical JSON bytes.

    Identical key order and escaping to :func:`canonical_json_bytes`; only
    whitespace is added. Empty objects and arrays stay ``{}`` / ``[]``.
    """
    writer = _CanonicalWriter(indent=_normalize_indent(indent))
    writer.write(data)
    return writer.getvalue()

