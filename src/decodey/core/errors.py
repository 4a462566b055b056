from __future__ import annotations


class DecodeyError(Exception):
    """Base class for decodey errors."""


class QuoteNotFoundError(DecodeyError):
    """No usable quote could be produced by the quote provider."""


class StorageError(DecodeyError):
    """Reading or writing a saved session failed."""
