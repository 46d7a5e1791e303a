"""
Exceptions for the web wallet provider.
"""
from typing import Optional


class WalletProviderError(Exception):
    """Base exception for wallet provider errors."""
    pass


class EmptyTransactionsError(WalletProviderError, ValueError):
    """Raised when a signing request is built without any transaction."""
    pass


class MalformedWalletReplyError(WalletProviderError):
    """Raised when the wallet's return URL cannot be decoded."""

    def __init__(self, message: str, field: Optional[str] = None, index: Optional[int] = None):
        self.field = field
        self.index = index
        super().__init__(message)


class MessageSigningError(WalletProviderError):
    """Raised when the wallet did not return a signed message."""
    pass
