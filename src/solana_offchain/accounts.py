"""
Associated Token Account Provisioning

Resolves the token account of an owner for a mint, creating it when absent.
Creation uses the idempotent instruction, so a concurrent creator of the same
address does not make this call fail.
"""

import logging

from solders.pubkey import Pubkey

from .addresses import associated_token_address
from .chain_context import LedgerClient
from .errors import ConfirmationTimeoutError, NetworkError, RetryExhaustedError
from .submission import SubmissionOrchestrator
from .transactions import TransactionBuilder
from .types import DerivedAccountRecord
from .wallet import SigningAccount


logger = logging.getLogger(__name__)

ALREADY_EXISTS_MARKERS = ("already in use", "already exists", "alreadyinuse", "already initialized")


def is_already_exists_error(error: Exception) -> bool:
    """Whether a creation failure only means the account is already there"""
    message = str(error).lower()
    return any(marker in message for marker in ALREADY_EXISTS_MARKERS)


class AccountProvisioner:
    """Finds or creates associated token accounts"""

    def __init__(
        self,
        builder: TransactionBuilder,
        orchestrator: SubmissionOrchestrator,
        creation_max_retries: int = 1,
    ):
        self.builder = builder
        self.orchestrator = orchestrator
        self.creation_max_retries = creation_max_retries

    def lookup(self, ledger: LedgerClient, mint: Pubkey, owner: Pubkey, program_id: Pubkey) -> DerivedAccountRecord:
        """
        Resolve the token account without creating it

        Returns:
            Record with exists_on_ledger False and zero balance when absent
        """
        address = associated_token_address(owner, mint, program_id)
        if ledger.get_account_info(address) is None:
            return DerivedAccountRecord(address=address, exists_on_ledger=False, raw_balance=0)
        balance = ledger.get_token_account_balance(address)
        return DerivedAccountRecord(address=address, exists_on_ledger=True, raw_balance=balance)

    def get_or_create(
        self,
        ledger: LedgerClient,
        mint: Pubkey,
        owner: Pubkey,
        program_id: Pubkey,
        payer: SigningAccount,
    ) -> DerivedAccountRecord:
        """
        Get the token account of owner for mint, creating it when absent

        A freshly created account is returned with a zero balance and is not
        queried again.

        Args:
            ledger: Open RPC connection
            mint: Token mint
            owner: Wallet owning the token account
            program_id: Token program of the mint
            payer: Account paying rent and fees for the creation

        Returns:
            DerivedAccountRecord for the associated token account

        Raises:
            NetworkError: Lookup failed, or creation failed for a reason other
                than the account already existing
        """
        record = self.lookup(ledger, mint, owner, program_id)
        if record.exists_on_ledger:
            logger.debug(f"Token account {record.address} exists with balance {record.raw_balance}")
            return record

        logger.info(f"Creating token account {record.address} for owner {owner}")
        built = self.builder.build_create_associated_account(payer.pubkey, owner, mint, program_id)
        try:
            signature = self.orchestrator.submit(
                ledger, built, [payer], max_retries=self.creation_max_retries
            )
            logger.info(f"Token account {record.address} created: {signature}")
        except RetryExhaustedError as e:
            cause = e.last_error
            if isinstance(cause, ConfirmationTimeoutError):
                # the next balance-affecting call resolves existence again
                logger.warning(f"Creation of {record.address} not confirmed: {cause}")
            elif cause is not None and is_already_exists_error(cause):
                logger.info(f"Token account {record.address} already exists")
            else:
                raise NetworkError(f"Failed to create token account {record.address}: {cause}") from e

        return DerivedAccountRecord(address=record.address, exists_on_ledger=True, raw_balance=0)
