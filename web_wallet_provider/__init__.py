"""
Web wallet provider.

Encodes login, logout and signing requests as redirects to a hosted web
wallet and decodes the signed transactions the wallet sends back.
"""
from .provider import WalletProvider
from .encoder import RequestEncoder
from .decoder import ResponseDecoder
from .models import Transaction, SignedTransaction, RequestOptions, WalletProviderStatus
from .redirect import RedirectGateway, InMemoryRedirectGateway
from .exceptions import (
    WalletProviderError,
    EmptyTransactionsError,
    MalformedWalletReplyError,
    MessageSigningError
)
from .version import __version__

__all__ = [
    "WalletProvider",
    "RequestEncoder",
    "ResponseDecoder",
    "Transaction",
    "SignedTransaction",
    "RequestOptions",
    "WalletProviderStatus",
    "RedirectGateway",
    "InMemoryRedirectGateway",
    "WalletProviderError",
    "EmptyTransactionsError",
    "MalformedWalletReplyError",
    "MessageSigningError",
    "__version__",
]
