"""
Tests for the chain context and the RPC boundary
"""

from unittest.mock import MagicMock

import httpx
import pytest
from solders.keypair import Keypair
from solders.signature import Signature
from solders.transaction_status import TransactionConfirmationStatus

from solana_offchain.chain_context import DEFAULT_ENDPOINTS, LedgerClient, SolanaChainContext
from solana_offchain.errors import NetworkError


@pytest.mark.unit
class TestSolanaChainContext:
    def test_default_endpoint_for_network(self):
        context = SolanaChainContext(network="testnet")
        assert context.rpc_url == DEFAULT_ENDPOINTS["testnet"]

    def test_unknown_network_without_endpoint(self):
        with pytest.raises(ValueError):
            SolanaChainContext(network="localnet")

    def test_explorer_url(self):
        assert SolanaChainContext(network="devnet").get_explorer_url("abc").endswith("/tx/abc?cluster=devnet")
        assert SolanaChainContext(network="mainnet-beta").get_explorer_url("abc") == "https://explorer.solana.com/tx/abc"

    def test_connect_opens_new_client_each_time(self):
        context = SolanaChainContext(rpc_url="http://localhost:8899")
        assert context.connect().client is not context.connect().client


@pytest.mark.unit
class TestLedgerClient:
    def test_get_balance(self):
        client = MagicMock()
        client.get_balance.return_value.value = 42

        assert LedgerClient(client).get_balance(Keypair().pubkey()) == 42

    def test_transport_errors_become_network_errors(self):
        client = MagicMock()
        client.get_balance.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(NetworkError, match="getBalance failed"):
            LedgerClient(client).get_balance(Keypair().pubkey())

    def test_signature_statuses(self):
        client = MagicMock()
        finalized = MagicMock(confirmation_status=TransactionConfirmationStatus.Finalized, err=None)
        client.get_signature_statuses.return_value.value = [None, finalized]
        signature = str(Signature.default())

        statuses = LedgerClient(client).get_signature_statuses([signature, signature])

        assert statuses[0] is None
        assert statuses[1].finalized
        assert statuses[1].err is None
