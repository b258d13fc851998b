"""
Error taxonomy for permit encoding, verification and address derivation.

``UnsupportedValueError`` signals a programming mistake (asking the canonical
encoder to encode a shape it cannot represent). Everything deriving from
``PermitError`` is a request-level rejection that callers are expected to
handle and surface.
"""

from __future__ import annotations


class UnsupportedValueError(TypeError):
    """The canonical encoder was given a value it cannot encode."""


class PermitError(ValueError):
    """Base class for rejected permits and addresses."""


class MalformedInputError(PermitError):
    """Public key or signature bytes are structurally invalid."""


class SignatureInvalidError(PermitError):
    """The signature is well formed but no signing scheme accepted it."""

    def __init__(self, message: str, *, scheme: str | None = None) -> None:
        super().__init__(message)
        self.scheme = scheme


class AddressEncodingError(PermitError):
    """A bech32 prefix, charset or checksum violation."""
