"""
Response decoder for the wallet's return URL.

After signing, the wallet sends the user agent back to the callback URL
with the signed transactions flattened into the same indexed families the
encoder emits, plus `signature[i]` for every transaction and the ambient
`signSession` and `walletProviderStatus` parameters.
"""
import logging
import re
import urllib.parse
from typing import Dict, List, Optional, Tuple

from pydantic import ValidationError

from .exceptions import MalformedWalletReplyError, MessageSigningError
from .models import SignedTransaction, WalletProviderStatus
from .redirect import RedirectGateway

# Configure logger
logger = logging.getLogger(__name__)

WALLET_PROVIDER_STATUS_PARAM = "walletProviderStatus"
MESSAGE_STATUS_PARAM = "status"
MESSAGE_SIGNATURE_PARAM = "signature"
MESSAGE_SIGNED_STATUS = "signed"

# Family whose indices define how many transactions the reply carries
COUNT_FAMILY = "nonce"

INTEGER_FIELDS = ("nonce", "gasPrice", "gasLimit", "version")
STRING_FIELDS = ("value", "receiver", "sender", "chainID", "signature")
OPTIONAL_FIELDS = {"data": ""}
TRANSACTION_FIELDS = INTEGER_FIELDS + STRING_FIELDS + tuple(OPTIONAL_FIELDS)

_INDEXED_KEY_RE = re.compile(r"^(?P<family>[A-Za-z_][A-Za-z0-9_]*)\[(?P<index>[0-9]+)\]$")
_INTEGER_RE = re.compile(r"[0-9]+")


def parse_query(query: str) -> Tuple[Dict[str, Dict[int, str]], Dict[str, str]]:
    """
    Split a query string into indexed families and plain scalars.

    Args:
        query: Query string, with or without the leading '?'

    Returns:
        Tuple of (families, scalars). `families` maps a base name to its
        values by index, e.g. {"nonce": {0: "127"}}; `scalars` holds the
        non-indexed parameters. A repeated key keeps its last value.
    """
    families: Dict[str, Dict[int, str]] = {}
    scalars: Dict[str, str] = {}
    for key, value in urllib.parse.parse_qsl(query.lstrip("?"), keep_blank_values=True):
        match = _INDEXED_KEY_RE.match(key)
        if match:
            families.setdefault(match.group("family"), {})[int(match.group("index"))] = value
        else:
            scalars[key] = value
    return families, scalars


def _parse_integer(raw: str, field: str, index: int) -> int:
    if not _INTEGER_RE.fullmatch(raw):
        raise MalformedWalletReplyError(
            f"Field {field}[{index}] is not a non-negative integer: {raw!r}",
            field=field,
            index=index
        )
    return int(raw)


class ResponseDecoder:
    """
    Decodes the wallet's reply from the current location.

    Status handling: a reply whose `walletProviderStatus` is `cancelled`
    decodes to an empty list. Any other status, or none, is decoded as a
    signing result; unknown values are logged.
    """

    def __init__(self, gateway: RedirectGateway):
        self.gateway = gateway

    def _query(self, query: Optional[str]) -> str:
        return self.gateway.get_current_query() if query is None else query

    def get_wallet_provider_status(self, query: Optional[str] = None) -> Optional[str]:
        """
        Read the raw `walletProviderStatus` value.

        Args:
            query: Query string to read; defaults to the current location's

        Returns:
            The status string, or None if the reply carries none
        """
        _, scalars = parse_query(self._query(query))
        return scalars.get(WALLET_PROVIDER_STATUS_PARAM)

    def decode_signed_transactions(self, query: Optional[str] = None) -> List[SignedTransaction]:
        """
        Reconstruct the signed transactions carried by a return URL.

        Args:
            query: Query string to decode; defaults to the current location's

        Returns:
            Signed transactions in index order. Empty if the query carries
            no `nonce[i]` parameter or the user cancelled.

        Raises:
            MalformedWalletReplyError: If indices are not contiguous, a
                mandatory field is missing, or a numeric field does not parse.
                Nothing is returned for a partially valid reply.
        """
        families, scalars = parse_query(self._query(query))

        nonce_indices = sorted(families.get(COUNT_FAMILY, {}))
        if not nonce_indices:
            logger.debug("No signed transactions in wallet URL")
            return []

        status = scalars.get(WALLET_PROVIDER_STATUS_PARAM)
        if status == WalletProviderStatus.CANCELLED.value:
            logger.warning("Wallet reported the signing request as cancelled; ignoring returned fields")
            return []
        if status is not None and status != WalletProviderStatus.TRANSACTIONS_SIGNED.value:
            logger.warning(f"Unknown {WALLET_PROVIDER_STATUS_PARAM} {status!r}; decoding anyway")

        # Unique nonce indices all below count means exactly 0..count-1.
        # Indexed parameters of other families belong to the callback URL.
        count = len(nonce_indices)
        for family in TRANSACTION_FIELDS:
            values = families.get(family, {})
            stray = sorted(i for i in values if i >= count)
            if stray:
                raise MalformedWalletReplyError(
                    f"Index {stray[0]} of {family} is out of range for {count} transaction(s)",
                    field=family,
                    index=stray[0]
                )

        try:
            transactions = [self._decode_one(families, index) for index in range(count)]
        except MalformedWalletReplyError as e:
            logger.error(f"Failed to decode wallet reply: {e}")
            raise

        logger.debug(f"Decoded {len(transactions)} signed transaction(s) from wallet URL")
        return transactions

    def _decode_one(self, families: Dict[str, Dict[int, str]], index: int) -> SignedTransaction:
        fields: Dict[str, object] = {}
        for field in INTEGER_FIELDS + STRING_FIELDS:
            raw = families.get(field, {}).get(index)
            if raw is None:
                raise MalformedWalletReplyError(
                    f"Missing mandatory field {field}[{index}]",
                    field=field,
                    index=index
                )
            fields[field] = _parse_integer(raw, field, index) if field in INTEGER_FIELDS else raw
        for field, default in OPTIONAL_FIELDS.items():
            fields[field] = families.get(field, {}).get(index, default)

        try:
            return SignedTransaction.model_validate(fields)
        except ValidationError as e:
            raise MalformedWalletReplyError(f"Invalid signed transaction at index {index}: {e}", index=index) from e

    def decode_message_signature(self, query: Optional[str] = None) -> str:
        """
        Read the signature of a message signed through the sign-message hook.

        Args:
            query: Query string to decode; defaults to the current location's

        Returns:
            Signature string

        Raises:
            MessageSigningError: If the wallet did not report the message as
                signed or returned no signature
        """
        _, scalars = parse_query(self._query(query))
        status = scalars.get(MESSAGE_STATUS_PARAM)
        signature = scalars.get(MESSAGE_SIGNATURE_PARAM)
        if status != MESSAGE_SIGNED_STATUS or not signature:
            raise MessageSigningError(f"Wallet did not return a signed message (status: {status!r})")
        return signature
