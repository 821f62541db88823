"""
Pytest configuration for offchain library tests

Fixtures wiring the transfer components to an in-memory ledger and a fake clock.
"""

import pytest
from solders.keypair import Keypair

from ledger_fakes import TOKEN_2022_PROGRAM_ID, TOKEN_PROGRAM_ID, FakeChainContext, FakeClock, FakeLedger
from solana_offchain.accounts import AccountProvisioner
from solana_offchain.submission import SubmissionOrchestrator
from solana_offchain.transactions import TransactionBuilder
from solana_offchain.transfers import TransferService
from solana_offchain.types import EnvironmentProfile
from solana_offchain.wallet import SigningAccount


@pytest.fixture
def production_profile():
    """Classic Token program with 8 decimals"""
    return EnvironmentProfile(name="production", token_program_id=TOKEN_PROGRAM_ID, decimals=8)


@pytest.fixture
def development_profile():
    """Token-2022 program with 9 decimals"""
    return EnvironmentProfile(name="development", token_program_id=TOKEN_2022_PROGRAM_ID, decimals=9)


@pytest.fixture
def sender():
    return SigningAccount(Keypair())


@pytest.fixture
def recipient():
    return Keypair().pubkey()


@pytest.fixture
def mint():
    return Keypair().pubkey()


@pytest.fixture
def ledger():
    return FakeLedger()


@pytest.fixture
def chain_context(ledger):
    return FakeChainContext(ledger)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def orchestrator(clock):
    return SubmissionOrchestrator(max_retries=3, clock=clock, sleep=clock.sleep)


@pytest.fixture
def builder():
    return TransactionBuilder()


@pytest.fixture
def provisioner(builder, orchestrator):
    return AccountProvisioner(builder, orchestrator)


@pytest.fixture
def transfer_service(chain_context, development_profile, orchestrator, builder, provisioner):
    return TransferService(
        chain_context,
        development_profile,
        orchestrator=orchestrator,
        builder=builder,
        provisioner=provisioner,
    )
