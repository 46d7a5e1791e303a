"""
Pytest fixtures for the web wallet provider tests.
"""
import pytest

from web_wallet_provider import InMemoryRedirectGateway, Transaction, WalletProvider

# Constants for testing
TEST_WALLET_URL = "http://mocked-wallet.com"
TEST_RETURN_URL = "http://return-to-wallet"
TEST_CALLBACK_URL = "http://another-callback"
ALICE = "moa1qyu5wthldzr8wx5c9ucg8kjagg0jfs53s8nr3zpz3hypefsdd8ssfq94h8"
BOB = "moa1spyavw0956vq68xj8y4tenjpq2wd5a9p2c6j8gsz7ztyrnpxrruq0yu4wk"
CONTRACT = "moa1qqqqqqqqqqqqqpgq7ykazrzd905zvnlr88dpfw06677lxe9w0n4s36fqq8"
TEST_SIGNATURE = (
    "414dcd2541ecdc1a41cafdd1ef4aff2ba7248402854478ee13c5a21968bd8dd4"
    "ab884335ea35c1404f85b0305f11df21615fecc9062e4668e74e8bb6a1e96c0d"
)

# Reply sent back by the wallet after signing one transaction
SIGNED_REPLY_QUERY = (
    "?signSession=1693313444978"
    "&nonce[0]=127"
    "&value[0]=100000000000000000"
    f"&receiver[0]={CONTRACT}"
    f"&sender[0]={ALICE}"
    "&gasPrice[0]=1000000000"
    "&gasLimit[0]=4200000"
    "&data[0]=wrapRewa"
    "&chainID[0]=D"
    "&version[0]=1"
    f"&signature[0]={TEST_SIGNATURE}"
    "&walletProviderStatus=transactionsSigned"
)


@pytest.fixture
def gateway():
    """In-memory location sitting on the dApp's return page"""
    return InMemoryRedirectGateway(href=TEST_RETURN_URL)


@pytest.fixture
def provider(gateway):
    """Provider pointed at the mocked wallet"""
    return WalletProvider(TEST_WALLET_URL, gateway=gateway)


@pytest.fixture
def transaction():
    """Transfer with a data payload and no explicit nonce or version"""
    return Transaction(
        sender=ALICE,
        receiver=BOB,
        value="0",
        gasLimit=50000,
        gasPrice=1000000000,
        data=b"hello",
        chainID="D"
    )


@pytest.fixture
def transaction_pair():
    """Two consecutive transfers with nonces 42 and 43"""
    return [
        Transaction(
            sender=ALICE,
            receiver=BOB,
            value="0",
            gasLimit=50000,
            gasPrice=1000000000,
            chainID="T",
            nonce=nonce
        )
        for nonce in (42, 43)
    ]
