"""
Resolver error types.

Raised at the fetch and extraction seams and propagated unchanged up to the
HTTP boundary, where every one of them becomes the same failure response.
Missing individual fields are never errors.
"""


class ResolverError(Exception):
    """Base class for failures that abort a transaction lookup."""


class FetchError(ResolverError):
    """The upstream receipt could not be retrieved (network, TLS, non-2xx)."""


class ParseError(ResolverError):
    """The fetched receipt could not be decoded into text or a markup tree."""


class InvalidIdentifierError(ResolverError):
    """The issuing network itself reports the transaction ID as unknown."""
