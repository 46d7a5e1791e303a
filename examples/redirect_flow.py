#!/usr/bin/env python3
"""
Walk through a login and signing round trip against the hosted wallet.
"""
import logging
import os

from web_wallet_provider import InMemoryRedirectGateway, Transaction, WalletProvider
from web_wallet_provider.encoder import encode_query


def main():
    """
    Demonstrate the redirect flow with an in-memory location.

    This example shows how to:
    1. Build login and signing redirects
    2. Simulate the wallet sending the user back with signatures
    3. Decode the signed transactions from the return URL
    """
    logging.basicConfig(level=logging.INFO)

    # Read configuration from environment
    WALLET_URL = os.environ.get("WALLET_PROVIDER_URL", "https://wallet.example.com")
    RETURN_URL = os.environ.get("RETURN_URL", "https://dapp.example.com/return")

    gateway = InMemoryRedirectGateway(href=RETURN_URL)
    provider = WalletProvider(WALLET_URL, gateway=gateway)

    print(f"Login URL: {provider.login({'token': 'example-token'})}")

    transaction = Transaction(
        sender="moa1qyu5wthldzr8wx5c9ucg8kjagg0jfs53s8nr3zpz3hypefsdd8ssfq94h8",
        receiver="moa1spyavw0956vq68xj8y4tenjpq2wd5a9p2c6j8gsz7ztyrnpxrruq0yu4wk",
        value="1000000000000000000",
        gasLimit=50000,
        gasPrice=1000000000,
        data=b"payment",
        chainID="T",
        nonce=7
    )
    sign_url = provider.sign_transaction(transaction, {"callbackUrl": RETURN_URL})
    print(f"Sign URL: {sign_url}")

    # Pretend the wallet signed and redirected back
    query = sign_url.split("?", 1)[1]
    reply = encode_query([("signature[0]", "ab" * 64), ("walletProviderStatus", "transactionsSigned")])
    gateway.navigate_to(f"{RETURN_URL}?{query}&{reply}")

    for signed in provider.get_transactions_from_wallet_url():
        print(signed.model_dump_json(by_alias=True, indent=2))


if __name__ == "__main__":
    main()
