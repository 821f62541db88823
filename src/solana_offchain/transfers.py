"""
Solana Transfer Service

Composition of the transfer components: validate, resolve the sender balance,
provision the receiving account, build, then submit and confirm.
Balances are compared in minor units, against the amount the built
instruction will actually carry.
"""

import logging
from decimal import Decimal
from typing import Optional, Union

from solders.pubkey import Pubkey

from .accounts import AccountProvisioner
from .addresses import parse_address
from .chain_context import SolanaChainContext
from .errors import InsufficientBalanceError, ValidationError
from .submission import SubmissionOrchestrator
from .transactions import TransactionBuilder, validate_amount
from .types import AssetKind, EnvironmentProfile, TransferRequest, TransferResult
from .units import LAMPORTS_DECIMALS, lamports_to_sol, to_human_units, to_minor_units


logger = logging.getLogger(__name__)

DEFAULT_TOKEN_MAX_RETRIES = 10
DEFAULT_NATIVE_MAX_RETRIES = 3


class TransferService:
    """Balance queries and transfers of SOL and one SPL token profile"""

    def __init__(
        self,
        chain_context: SolanaChainContext,
        profile: EnvironmentProfile,
        orchestrator: Optional[SubmissionOrchestrator] = None,
        builder: Optional[TransactionBuilder] = None,
        provisioner: Optional[AccountProvisioner] = None,
        token_max_retries: int = DEFAULT_TOKEN_MAX_RETRIES,
        native_max_retries: int = DEFAULT_NATIVE_MAX_RETRIES,
    ):
        """
        Args:
            chain_context: Source of per-operation RPC connections
            profile: Token program and decimals of the active environment
            orchestrator: Submission loop shared by transfers and account creation
            builder: Transaction builder
            provisioner: Token account provisioner
            token_max_retries: Submission attempts for token transfers
            native_max_retries: Submission attempts for SOL transfers
        """
        self.chain_context = chain_context
        self.profile = profile
        self.orchestrator = orchestrator or SubmissionOrchestrator()
        self.builder = builder or TransactionBuilder()
        self.provisioner = provisioner or AccountProvisioner(self.builder, self.orchestrator)
        self.token_max_retries = token_max_retries
        self.native_max_retries = native_max_retries

    def get_balance(self, address: Union[str, Pubkey]) -> Decimal:
        """SOL balance of address"""
        owner = parse_address(address)
        ledger = self.chain_context.connect()
        return lamports_to_sol(ledger.get_balance(owner))

    def get_token_balance(self, address: Union[str, Pubkey], mint: Union[str, Pubkey]) -> Decimal:
        """
        Token balance held by the associated token account of address

        Returns zero when the token account does not exist; nothing is created.
        """
        owner = parse_address(address)
        mint_key = parse_address(mint)
        ledger = self.chain_context.connect()
        record = self.provisioner.lookup(ledger, mint_key, owner, self.profile.token_program_id)
        return to_human_units(record.raw_balance, self.profile.decimals)

    def transfer_native(self, request: TransferRequest) -> TransferResult:
        """
        Transfer SOL from the request sender to the recipient

        Raises:
            ValidationError: Negative amount or malformed recipient (no network call made)
            InsufficientBalanceError: Sender balance below the amount
            NetworkError: Balance lookup failed
            RetryExhaustedError: Transaction never finalized
        """
        if request.asset is not AssetKind.NATIVE:
            raise ValidationError("transfer_native requires a native asset request")
        amount = validate_amount(request.amount)
        parse_address(request.recipient)

        ledger = self.chain_context.connect()
        lamports = ledger.get_balance(request.sender.pubkey)
        balance = lamports_to_sol(lamports)
        logger.info(f"SOL balance of {request.sender.address}: {balance}, requested: {amount}")
        if lamports < to_minor_units(amount, LAMPORTS_DECIMALS):
            raise InsufficientBalanceError(balance, amount)

        built = self.builder.build_transfer(request, None, None, self.profile)
        signature = self.orchestrator.submit(ledger, built, [request.sender], max_retries=self.native_max_retries)
        logger.info(f"Transaction Signature: {signature}")
        return TransferResult(signature=signature)

    def transfer_token(self, request: TransferRequest) -> TransferResult:
        """
        Transfer tokens of request.mint using TransferChecked

        Both token accounts are resolved through the provisioner; missing ones
        are created with the sender paying.

        Raises:
            ValidationError: Negative amount or malformed address (no network call made)
            InsufficientBalanceError: Sender token balance below the amount
            NetworkError: Lookup or account creation failed
            RetryExhaustedError: Transaction never finalized
        """
        if request.asset is not AssetKind.TOKEN:
            raise ValidationError("transfer_token requires a token asset request")
        amount = validate_amount(request.amount)
        mint = parse_address(request.mint)
        recipient = parse_address(request.recipient)
        program_id = self.profile.token_program_id
        sender = request.sender

        ledger = self.chain_context.connect()
        sender_account = self.provisioner.get_or_create(ledger, mint, sender.pubkey, program_id, payer=sender)
        balance = to_human_units(sender_account.raw_balance, self.profile.decimals)
        logger.info(f"Token balance of {sender.address}: {balance}, requested: {amount}")
        if sender_account.raw_balance < to_minor_units(amount, self.profile.decimals):
            raise InsufficientBalanceError(balance, amount)

        recipient_account = self.provisioner.get_or_create(ledger, mint, recipient, program_id, payer=sender)
        logger.debug(f"senderAccount: {sender_account.address}, recipientAccount: {recipient_account.address}")

        built = self.builder.build_transfer(request, sender_account, recipient_account, self.profile)
        signature = self.orchestrator.submit(ledger, built, [sender], max_retries=self.token_max_retries)
        logger.info(f"Transaction Signature: {signature}")
        return TransferResult(signature=signature)
