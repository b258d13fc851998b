"""Stateless verification of wallet-signed query permits."""

__version__ = "0.1.0"
