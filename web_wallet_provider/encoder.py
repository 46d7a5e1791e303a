"""
Request encoder for the wallet hook endpoints.

Every request is a redirect to `<wallet_url>/hook/<action>` carrying its
arguments as query parameters, with `callbackUrl` always last. A signing
request flattens its transactions into indexed families (`nonce[0]`,
`nonce[1]`, ..., `value[0]`, ...): each family lists all transactions
before the next family starts.
"""
import logging
import urllib.parse
from typing import Any, Callable, Dict, List, Sequence, Tuple, Union

from .exceptions import EmptyTransactionsError
from .models import OptionsLike, RequestOptions, Transaction, to_request_options
from .redirect import RedirectGateway

# Configure logger
logger = logging.getLogger(__name__)

LOGIN_HOOK = "/hook/login"
LOGOUT_HOOK = "/hook/logout"
SIGN_TRANSACTIONS_HOOK = "/hook/sign"
SIGN_MESSAGE_HOOK = "/hook/sign-message"

CALLBACK_URL_PARAM = "callbackUrl"
TOKEN_PARAM = "token"
MESSAGE_PARAM = "message"

DEFAULT_NONCE = 0
DEFAULT_VERSION = 2

# Characters left unescaped in values so callback URLs stay readable
_SAFE_CHARS = ":/"

TransactionLike = Union[Transaction, Dict[str, Any]]


def _data_as_text(tx: Transaction) -> str:
    return tx.data.decode("utf-8") if tx.data else ""


# Wire order of the indexed families in a signing request
TRANSACTION_FAMILIES: List[Tuple[str, Callable[[Transaction], Any]]] = [
    ("nonce", lambda tx: tx.nonce if tx.nonce is not None else DEFAULT_NONCE),
    ("value", lambda tx: tx.value),
    ("receiver", lambda tx: tx.receiver),
    ("sender", lambda tx: tx.sender),
    ("gasPrice", lambda tx: tx.gas_price),
    ("gasLimit", lambda tx: tx.gas_limit),
    ("data", _data_as_text),
    ("chainID", lambda tx: tx.chain_id),
    ("version", lambda tx: tx.version if tx.version is not None else DEFAULT_VERSION),
]


def encode_query(params: Sequence[Tuple[str, Any]]) -> str:
    """
    Percent-encode an ordered list of query parameters.

    Args:
        params: (name, value) pairs, emitted in the given order

    Returns:
        Query string without the leading '?'
    """
    return urllib.parse.urlencode(list(params), safe=_SAFE_CHARS, quote_via=urllib.parse.quote)


def transaction_params(transactions: Sequence[Transaction]) -> List[Tuple[str, Any]]:
    """
    Flatten transactions into indexed query parameters, one family at a time.

    Args:
        transactions: Transactions in signing order

    Returns:
        Ordered (name, value) pairs such as ("nonce[0]", 42)
    """
    params: List[Tuple[str, Any]] = []
    for name, accessor in TRANSACTION_FAMILIES:
        for index, tx in enumerate(transactions):
            params.append((f"{name}[{index}]", accessor(tx)))
    return params


class RequestEncoder:
    """
    Builds hook URLs for the wallet application.

    The default callback URL is the gateway's current location, read each
    time a URL is built.
    """

    def __init__(self, wallet_url: str, gateway: RedirectGateway):
        """
        Initialize the encoder

        Args:
            wallet_url: Origin of the wallet application
            gateway: Source of the current location
        """
        self.wallet_url = wallet_url.rstrip('/')
        self.gateway = gateway

    def build_login_url(self, options: OptionsLike = None) -> str:
        """
        Build the login hook URL.

        Args:
            options: Optional callbackUrl and token

        Returns:
            Absolute URL: `token` (if given) followed by `callbackUrl`
        """
        opts = to_request_options(options)
        params: List[Tuple[str, Any]] = []
        if opts.token is not None:
            params.append((TOKEN_PARAM, opts.token))
        params.append((CALLBACK_URL_PARAM, self._resolve_callback(opts)))
        return self._build_url(LOGIN_HOOK, params)

    def build_logout_url(self, options: OptionsLike = None) -> str:
        """
        Build the logout hook URL.

        Args:
            options: Optional callbackUrl

        Returns:
            Absolute URL carrying only `callbackUrl`
        """
        opts = to_request_options(options)
        self._ignore_token(opts)
        return self._build_url(LOGOUT_HOOK, [(CALLBACK_URL_PARAM, self._resolve_callback(opts))])

    def build_sign_transaction_url(self, transaction: TransactionLike, options: OptionsLike = None) -> str:
        """Build the signing URL for one transaction (still indexed as [0])."""
        return self.build_sign_transactions_url([transaction], options)

    def build_sign_transactions_url(
        self,
        transactions: Sequence[TransactionLike],
        options: OptionsLike = None
    ) -> str:
        """
        Build the signing URL for one or more transactions.

        Args:
            transactions: Transactions (or dicts accepted by Transaction) in
                signing order
            options: Optional callbackUrl

        Returns:
            Absolute URL with the indexed families followed by `callbackUrl`

        Raises:
            EmptyTransactionsError: If no transaction is given
            pydantic.ValidationError: If a dict is not a valid transaction
            UnicodeDecodeError: If a data payload is not valid UTF-8
        """
        txs = [
            tx if isinstance(tx, Transaction) else Transaction.model_validate(tx)
            for tx in transactions
        ]
        if not txs:
            raise EmptyTransactionsError("Cannot build a signing request without transactions")

        opts = to_request_options(options)
        self._ignore_token(opts)
        params = transaction_params(txs)
        params.append((CALLBACK_URL_PARAM, self._resolve_callback(opts)))
        return self._build_url(SIGN_TRANSACTIONS_HOOK, params)

    def build_sign_message_url(self, message: str, options: OptionsLike = None) -> str:
        """
        Build the message signing URL.

        Args:
            message: Message to be signed by the wallet
            options: Optional callbackUrl

        Returns:
            Absolute URL with `message` followed by `callbackUrl`
        """
        opts = to_request_options(options)
        self._ignore_token(opts)
        params = [(MESSAGE_PARAM, message), (CALLBACK_URL_PARAM, self._resolve_callback(opts))]
        return self._build_url(SIGN_MESSAGE_HOOK, params)

    def _resolve_callback(self, options: RequestOptions) -> str:
        if options.callback_url:
            return options.callback_url
        return self.gateway.get_current_url()

    def _ignore_token(self, options: RequestOptions) -> None:
        if options.token is not None:
            logger.debug("Token is only sent with login requests; ignoring it")

    def _build_url(self, path: str, params: Sequence[Tuple[str, Any]]) -> str:
        url = f"{self.wallet_url}{path}?{encode_query(params)}"
        logger.debug(f"Built wallet URL: {url}")
        return url
