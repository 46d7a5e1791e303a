"""
Data models for the web wallet provider.
"""
import re
import urllib.parse
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

_DECIMAL_RE = re.compile(r"[0-9]+")


class WalletProviderStatus(str, Enum):
    """
    Values of the `walletProviderStatus` parameter the wallet appends
    to the callback URL.
    """
    TRANSACTIONS_SIGNED = "transactionsSigned"
    CANCELLED = "cancelled"


class Transaction(BaseModel):
    """
    Unsigned transaction handed to the wallet for signing.

    Optional fields are left unset here; the encoder decides what an
    unset nonce, data payload or version means on the wire.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    nonce: Optional[int] = Field(None, ge=0)
    value: str
    receiver: str
    sender: str
    gas_price: int = Field(..., alias="gasPrice", ge=0)
    gas_limit: int = Field(..., alias="gasLimit", ge=0)
    data: Optional[bytes] = None
    chain_id: str = Field(..., alias="chainID")
    version: Optional[int] = Field(None, gt=0)

    @field_validator("value", mode="before")
    @classmethod
    def _int_value_to_str(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("value")
    @classmethod
    def _check_decimal(cls, v: str) -> str:
        if not _DECIMAL_RE.fullmatch(v):
            raise ValueError("value must be a non-negative decimal string")
        return v


class SignedTransaction(BaseModel):
    """Transaction plus signature, as returned by the wallet"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    nonce: int = Field(..., ge=0)
    value: str
    receiver: str
    sender: str
    gas_price: int = Field(..., alias="gasPrice", ge=0)
    gas_limit: int = Field(..., alias="gasLimit", ge=0)
    data: str = ""
    chain_id: str = Field(..., alias="chainID")
    version: int = Field(..., ge=0)
    signature: str


class RequestOptions(BaseModel):
    """Per-call options for login, logout and signing redirects"""
    model_config = ConfigDict(populate_by_name=True)

    callback_url: Optional[str] = Field(None, alias="callbackUrl")
    token: Optional[str] = None

    @field_validator("callback_url")
    @classmethod
    def _check_absolute(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        parsed = urllib.parse.urlparse(v)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ValueError(f"callbackUrl must be an absolute http(s) URL (got: {v!r})")
        return v


OptionsLike = Union[RequestOptions, Dict[str, Any], None]


def to_request_options(options: OptionsLike) -> RequestOptions:
    """
    Normalize caller-supplied options.

    Args:
        options: A RequestOptions instance, a plain dict using either
            field names or wire names (``callbackUrl``), or None

    Returns:
        RequestOptions instance

    Raises:
        pydantic.ValidationError: If the options are invalid
    """
    if options is None:
        return RequestOptions()
    if isinstance(options, RequestOptions):
        return options
    return RequestOptions.model_validate(options)
