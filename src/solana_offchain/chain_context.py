"""
Solana Chain Context Management

Pure chain context functionality without web dependencies.
Holds network configuration and opens RPC connections to a Solana node. The
LedgerClient wrapper is the only place that talks to solana-py; it converts
responses into plain values and every transport or node failure into
NetworkError.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.api import Client
from solana.rpc.commitment import Commitment, Confirmed
from solana.rpc.core import RPCException
from solana.rpc.types import TxOpts
from solders.account import Account
from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction
from solders.transaction_status import TransactionConfirmationStatus

from .errors import NetworkError


logger = logging.getLogger(__name__)

RPC_ERRORS = (RPCException, SolanaRpcException, httpx.HTTPError)

FINALIZED = "finalized"

DEFAULT_ENDPOINTS = {
    "mainnet-beta": "https://api.mainnet-beta.solana.com",
    "devnet": "https://api.devnet.solana.com",
    "testnet": "https://api.testnet.solana.com",
}


def _confirmation_name(status: Optional[TransactionConfirmationStatus]) -> Optional[str]:
    if status == TransactionConfirmationStatus.Finalized:
        return FINALIZED
    if status == TransactionConfirmationStatus.Confirmed:
        return "confirmed"
    if status == TransactionConfirmationStatus.Processed:
        return "processed"
    return None


@dataclass(frozen=True)
class SignatureStatus:
    """Status of one signature as reported by getSignatureStatuses"""

    confirmation_status: Optional[str]
    err: Optional[str] = None

    @property
    def finalized(self) -> bool:
        return self.confirmation_status == FINALIZED


class LedgerClient:
    """Blocking RPC boundary used by the transfer components"""

    def __init__(self, client: Client, commitment: Commitment = Confirmed, skip_preflight: bool = False):
        self.client = client
        self.commitment = commitment
        self.skip_preflight = skip_preflight

    def get_balance(self, address: Pubkey) -> int:
        """Native balance in lamports"""
        try:
            return int(self.client.get_balance(address, commitment=self.commitment).value)
        except RPC_ERRORS as e:
            raise NetworkError(f"getBalance failed for {address}: {e}") from e

    def get_token_account_balance(self, address: Pubkey) -> int:
        """Token account balance in raw units"""
        try:
            resp = self.client.get_token_account_balance(address, commitment=self.commitment)
        except RPC_ERRORS as e:
            raise NetworkError(f"getTokenAccountBalance failed for {address}: {e}") from e
        return int(resp.value.amount)

    def get_account_info(self, address: Pubkey) -> Optional[Account]:
        """Account data, or None when no account exists at address"""
        try:
            return self.client.get_account_info(address, commitment=self.commitment).value
        except RPC_ERRORS as e:
            raise NetworkError(f"getAccountInfo failed for {address}: {e}") from e

    def get_latest_blockhash(self) -> Hash:
        try:
            return self.client.get_latest_blockhash(commitment=self.commitment).value.blockhash
        except RPC_ERRORS as e:
            raise NetworkError(f"getLatestBlockhash failed: {e}") from e

    def send_transaction(self, transaction: Transaction) -> str:
        """Send a signed transaction and return its signature"""
        opts = TxOpts(skip_preflight=self.skip_preflight, preflight_commitment=self.commitment)
        try:
            resp = self.client.send_raw_transaction(bytes(transaction), opts=opts)
        except RPC_ERRORS as e:
            raise NetworkError(f"sendTransaction failed: {e}") from e
        return str(resp.value)

    def get_signature_statuses(self, signatures: Sequence[str]) -> list[Optional[SignatureStatus]]:
        """One entry per signature; None when the node has not seen it"""
        try:
            resp = self.client.get_signature_statuses([Signature.from_string(s) for s in signatures])
        except RPC_ERRORS as e:
            raise NetworkError(f"getSignatureStatuses failed: {e}") from e

        statuses = []
        for status in resp.value:
            if status is None:
                statuses.append(None)
                continue
            statuses.append(
                SignatureStatus(
                    confirmation_status=_confirmation_name(status.confirmation_status),
                    err=str(status.err) if status.err is not None else None,
                )
            )
        return statuses


class SolanaChainContext:
    """Manages Solana network configuration and RPC connections"""

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        network: str = "devnet",
        commitment: Commitment = Confirmed,
        timeout: float = 10.0,
        skip_preflight: bool = False,
    ):
        """
        Initialize chain context

        Args:
            rpc_url: RPC endpoint; defaults to the public endpoint of network
            network: Cluster name ("mainnet-beta", "devnet" or "testnet")
            commitment: Commitment used for reads and preflight
            timeout: HTTP timeout in seconds for each RPC request
            skip_preflight: Skip node-side simulation when sending
        """
        if not rpc_url and network not in DEFAULT_ENDPOINTS:
            raise ValueError(f"Unknown network {network!r} and no RPC endpoint given")

        self.network = network
        self.rpc_url = rpc_url or DEFAULT_ENDPOINTS[network]
        self.commitment = commitment
        self.timeout = timeout
        self.skip_preflight = skip_preflight

    def connect(self) -> LedgerClient:
        """
        Open a new RPC connection

        Each operation gets its own client; nothing is shared across calls.
        """
        logger.debug(f"Opening RPC connection to {self.rpc_url}")
        client = Client(self.rpc_url, commitment=self.commitment, timeout=self.timeout)
        return LedgerClient(client, commitment=self.commitment, skip_preflight=self.skip_preflight)

    def get_explorer_url(self, signature: str) -> str:
        """
        Get explorer URL for a transaction signature

        Args:
            signature: Transaction signature

        Returns:
            Explorer URL for the transaction
        """
        if self.network == "mainnet-beta":
            return f"https://explorer.solana.com/tx/{signature}"
        return f"https://explorer.solana.com/tx/{signature}?cluster={self.network}"
