from __future__ import annotations


class AlephiumIndexerError(Exception):
    """Base for every error raised by the indexer."""


class TransportError(AlephiumIndexerError):
    """Network or TLS failure before a response was received."""


class APIError(AlephiumIndexerError):
    """Upstream API answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str, url: str = ""):
        super().__init__(f"not 2xx http response code from api: status={status_code} url={url}")
        self.status_code = status_code
        self.body = body
        self.url = url


class DecodeError(AlephiumIndexerError, ValueError):
    """Malformed hex, JSON or numeric payload."""


class ContractCallError(AlephiumIndexerError):
    """On-chain contract call reported an error string."""

    def __init__(self, message: str, address: str = ""):
        super().__init__(message)
        self.message = message
        self.address = address


class AddressFormatError(AlephiumIndexerError, ValueError):
    """Address is not a valid base58 Alephium address."""


class IndexerInputError(AlephiumIndexerError, ValueError):
    """Invalid parameters for a use case."""
