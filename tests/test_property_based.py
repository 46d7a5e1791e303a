"""
Property-based tests for the web wallet provider.

These tests verify that the codec properties hold across many random
transactions.
"""
from urllib.parse import parse_qsl, urlsplit

from hypothesis import given, settings, strategies as st

from web_wallet_provider import InMemoryRedirectGateway, RequestEncoder, ResponseDecoder, SignedTransaction, Transaction
from web_wallet_provider.encoder import encode_query

WALLET_URL = "https://wallet.example.com"
CALLBACK_URL = "https://dapp.example.com/return?step=sign"
WIRE_ORDER = ["nonce", "value", "receiver", "sender", "gasPrice", "gasLimit", "data", "chainID", "version", "callbackUrl"]

address_strategy = st.from_regex(r"moa1[02-9ac-hj-np-z]{58}", fullmatch=True)
transaction_strategy = st.builds(
    Transaction,
    nonce=st.one_of(st.none(), st.integers(min_value=0, max_value=2**64)),
    value=st.integers(min_value=0, max_value=10**30).map(str),
    receiver=address_strategy,
    sender=address_strategy,
    gasPrice=st.integers(min_value=0, max_value=10**12),
    gasLimit=st.integers(min_value=0, max_value=10**9),
    data=st.one_of(st.none(), st.text(max_size=64).map(lambda s: s.encode("utf-8"))),
    chainID=st.sampled_from(["1", "D", "T", "local-testnet"]),
    version=st.one_of(st.none(), st.integers(min_value=1, max_value=10)),
)
transactions_strategy = st.lists(transaction_strategy, min_size=1, max_size=5)


def _wallet_reply(sign_url, signatures):
    """Turn a signing URL into the query the wallet sends back."""
    query = urlsplit(sign_url).query
    signed = encode_query([(f"signature[{i}]", sig) for i, sig in enumerate(signatures)])
    return f"?signSession=1&{query}&{signed}&walletProviderStatus=transactionsSigned"


@settings(max_examples=50)  # Limit number of test cases to keep runtime reasonable
@given(transactions=transactions_strategy)
def test_encode_then_decode_round_trip(transactions):
    """
    Decoding the wallet's echo of a signing URL gives back the transactions,
    with the wire defaults filled in.
    """
    encoder = RequestEncoder(WALLET_URL, InMemoryRedirectGateway())
    url = encoder.build_sign_transactions_url(transactions, {"callbackUrl": CALLBACK_URL})
    signatures = [f"{i:02x}" * 64 for i in range(len(transactions))]

    decoded = ResponseDecoder(InMemoryRedirectGateway()).decode_signed_transactions(_wallet_reply(url, signatures))

    expected = [
        SignedTransaction(
            nonce=tx.nonce if tx.nonce is not None else 0,
            value=tx.value,
            receiver=tx.receiver,
            sender=tx.sender,
            gasPrice=tx.gas_price,
            gasLimit=tx.gas_limit,
            data=tx.data.decode("utf-8") if tx.data else "",
            chainID=tx.chain_id,
            version=tx.version if tx.version is not None else 2,
            signature=sig,
        )
        for tx, sig in zip(transactions, signatures)
    ]
    assert decoded == expected


@settings(max_examples=50)
@given(transactions=transactions_strategy)
def test_family_order_is_fixed(transactions):
    """Families never interleave and always come in wire order."""
    encoder = RequestEncoder(WALLET_URL, InMemoryRedirectGateway())
    url = encoder.build_sign_transactions_url(transactions, {"callbackUrl": CALLBACK_URL})
    keys = [key for key, _ in parse_qsl(urlsplit(url).query, keep_blank_values=True)]

    families = [key.split("[", 1)[0] for key in keys]
    collapsed = [name for i, name in enumerate(families) if i == 0 or families[i - 1] != name]
    assert collapsed == WIRE_ORDER

    n = len(transactions)
    for position, name in enumerate(WIRE_ORDER[:-1]):
        block = keys[position * n:(position + 1) * n]
        assert block == [f"{name}[{i}]" for i in range(n)]
    assert keys[-1] == "callbackUrl"
