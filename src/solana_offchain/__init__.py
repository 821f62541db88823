"""
Solana Core Library

This module provides core Solana transfer functionality separated from the web interface.
Contains pure business logic for address derivation, token accounts, transactions and transfers.
"""

from .accounts import AccountProvisioner
from .chain_context import LedgerClient, SolanaChainContext
from .submission import SubmissionOrchestrator
from .transactions import TransactionBuilder
from .transfers import TransferService
from .types import AssetKind, EnvironmentProfile, TransferRequest, TransferResult
from .wallet import SigningAccount


__all__ = [
    "AccountProvisioner",
    "AssetKind",
    "EnvironmentProfile",
    "LedgerClient",
    "SigningAccount",
    "SolanaChainContext",
    "SubmissionOrchestrator",
    "TransactionBuilder",
    "TransferRequest",
    "TransferResult",
    "TransferService",
]
