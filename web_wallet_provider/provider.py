"""
WalletProvider - Main entry point for the web wallet redirect protocol.
"""
import logging
import os
import urllib.parse
from typing import List, Optional, Sequence

from .decoder import ResponseDecoder
from .encoder import RequestEncoder, TransactionLike
from .models import OptionsLike, SignedTransaction
from .redirect import InMemoryRedirectGateway, RedirectGateway

WALLET_URL_ENV = "WALLET_PROVIDER_URL"


class WalletProvider:
    """
    Provider for the hosted web wallet.

    Each request is a redirect: the provider builds the hook URL, sends the
    user agent there and returns the URL. The wallet's answer becomes
    visible only after it redirects back to the callback URL, where the
    get_*_from_wallet_url methods decode it.
    """

    def __init__(
        self,
        wallet_url: Optional[str] = None,
        gateway: Optional[RedirectGateway] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the WalletProvider

        Args:
            wallet_url: Origin of the wallet application (e.g.,
                "https://wallet.example.com"). Defaults to the
                WALLET_PROVIDER_URL environment variable.
            gateway: Access to the user agent's location (defaults to an
                in-memory gateway)
            logger: Optional logger instance to use for debug/info logging

        Raises:
            ValueError: If no wallet URL is configured or it is not an
                absolute http(s) URL
        """
        wallet_url = wallet_url or os.environ.get(WALLET_URL_ENV)
        if not wallet_url:
            raise ValueError(f"wallet_url must be provided or set via {WALLET_URL_ENV}")

        parsed = urllib.parse.urlparse(wallet_url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValueError(f"wallet_url must be an absolute http(s) URL (got: {wallet_url})")

        self.wallet_url = wallet_url.rstrip('/')
        self.gateway = gateway if gateway is not None else InMemoryRedirectGateway()
        self.logger = logger or logging.getLogger(__name__)
        self.encoder = RequestEncoder(self.wallet_url, self.gateway)
        self.decoder = ResponseDecoder(self.gateway)
        self._initialized = False

    def init(self) -> bool:
        """Mark the provider as ready. Redirect providers need no setup."""
        self._initialized = True
        return True

    def is_initialized(self) -> bool:
        return self._initialized

    def is_connected(self) -> bool:
        """
        Whether the provider can currently be used.

        The wallet session lives on the wallet's side, so a redirect
        provider has no connection state of its own.
        """
        return True

    def login(self, options: OptionsLike = None) -> str:
        """
        Redirect to the wallet's login hook.

        Args:
            options: Optional callbackUrl and token (dict or RequestOptions)

        Returns:
            The URL navigated to
        """
        return self._redirect(self.encoder.build_login_url(options))

    def logout(self, options: OptionsLike = None) -> str:
        """
        Redirect to the wallet's logout hook.

        Args:
            options: Optional callbackUrl (dict or RequestOptions)

        Returns:
            The URL navigated to
        """
        return self._redirect(self.encoder.build_logout_url(options))

    def sign_transaction(self, transaction: TransactionLike, options: OptionsLike = None) -> str:
        """
        Redirect to the wallet to sign a single transaction.

        Args:
            transaction: Transaction to sign
            options: Optional callbackUrl

        Returns:
            The URL navigated to
        """
        return self.sign_transactions([transaction], options)

    def sign_transactions(self, transactions: Sequence[TransactionLike], options: OptionsLike = None) -> str:
        """
        Redirect to the wallet to sign several transactions at once.

        Args:
            transactions: Transactions to sign, in order
            options: Optional callbackUrl

        Returns:
            The URL navigated to

        Raises:
            EmptyTransactionsError: If transactions is empty (no navigation
                takes place)
        """
        return self._redirect(self.encoder.build_sign_transactions_url(transactions, options))

    def sign_message(self, message: str, options: OptionsLike = None) -> str:
        """
        Redirect to the wallet to sign an arbitrary message.

        Args:
            message: Message to sign
            options: Optional callbackUrl

        Returns:
            The URL navigated to
        """
        return self._redirect(self.encoder.build_sign_message_url(message, options))

    def get_transactions_from_wallet_url(self) -> List[SignedTransaction]:
        """
        Decode the signed transactions from the current location.

        Returns:
            Signed transactions in their original order; empty if the
            location carries none or the user cancelled

        Raises:
            MalformedWalletReplyError: If the wallet's reply is malformed
        """
        return self.decoder.decode_signed_transactions()

    def get_wallet_provider_status(self) -> Optional[str]:
        """Raw walletProviderStatus of the current location, if any."""
        return self.decoder.get_wallet_provider_status()

    def get_message_signature_from_wallet_url(self) -> str:
        """
        Read the message signature from the current location.

        Raises:
            MessageSigningError: If the message was not signed
        """
        return self.decoder.decode_message_signature()

    def _redirect(self, url: str) -> str:
        self.logger.info(f"Redirecting to wallet: {url}")
        self.gateway.navigate_to(url)
        return url
