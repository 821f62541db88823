"""
Solana Transaction Operations

Builds transfer instructions for native SOL and SPL tokens.

Token transfers always use TransferChecked: the instruction carries the mint
and the expected decimals, so the ledger rejects it when the configured
precision or mint does not match the real asset.
"""

import logging
from decimal import Decimal
from typing import Optional

from solders.instruction import Instruction
from solders.pubkey import Pubkey
from solders.system_program import TransferParams, transfer
from spl.token.instructions import (
    TransferCheckedParams,
    create_idempotent_associated_token_account,
    transfer_checked,
)

from .addresses import associated_token_address, parse_address
from .errors import ValidationError
from .types import AssetKind, BuiltTransaction, DerivedAccountRecord, EnvironmentProfile, TransferRequest
from .units import LAMPORTS_DECIMALS, to_minor_units


logger = logging.getLogger(__name__)

def validate_amount(amount) -> Decimal:
    """Reject negative or non-decimal amounts; zero is allowed"""
    if isinstance(amount, float) or not isinstance(amount, (Decimal, int)):
        raise ValidationError(f"Amount must be a Decimal, got {type(amount).__name__}")
    value = Decimal(amount)
    if not value.is_finite():
        raise ValidationError(f"Amount must be finite, got {value}")
    if value < 0:
        raise ValidationError("Negative numbers are not allowed.")
    return value


class TransactionBuilder:
    """Assembles transfer transactions for one environment profile at a time"""

    def build_transfer(
        self,
        request: TransferRequest,
        sender_derived: Optional[DerivedAccountRecord],
        recipient_derived: Optional[DerivedAccountRecord],
        profile: EnvironmentProfile,
    ) -> BuiltTransaction:
        """
        Build a native or token transfer

        Args:
            request: Transfer request
            sender_derived: Sender token account (token transfers only)
            recipient_derived: Recipient token account (token transfers only)
            profile: Token program and decimals of the active environment

        Returns:
            BuiltTransaction with a single instruction, paid by the sender

        Raises:
            ValidationError: Negative amount, malformed address or missing token accounts
        """
        amount = validate_amount(request.amount)

        if request.asset is AssetKind.NATIVE:
            instruction = self.native_transfer_instruction(
                request.sender.pubkey, parse_address(request.recipient), amount
            )
            description = f"SOL transfer of {amount} to {request.recipient}"
        else:
            if sender_derived is None or recipient_derived is None:
                raise ValidationError("Token transfers require sender and recipient token accounts")
            instruction = self.token_transfer_instruction(
                source=sender_derived.address,
                dest=recipient_derived.address,
                amount=amount,
                owner=request.sender.pubkey,
                mint=parse_address(request.mint),
                profile=profile,
            )
            description = f"SPL transfer of {amount} to {request.recipient} ({profile.name})"

        logger.debug(f"Built {description}")
        return BuiltTransaction(
            instructions=(instruction,),
            fee_payer=request.sender.pubkey,
            description=description,
        )

    def native_transfer_instruction(self, sender: Pubkey, recipient: Pubkey, amount: Decimal) -> Instruction:
        """System program transfer; SOL always has 9 decimals"""
        lamports = to_minor_units(amount, LAMPORTS_DECIMALS)
        return transfer(TransferParams(from_pubkey=sender, to_pubkey=recipient, lamports=lamports))

    def token_transfer_instruction(
        self,
        source: Pubkey,
        dest: Pubkey,
        amount: Decimal,
        owner: Pubkey,
        mint: Pubkey,
        profile: EnvironmentProfile,
    ) -> Instruction:
        """TransferChecked under the profile's token program and decimals"""
        raw_amount = to_minor_units(amount, profile.decimals)
        return transfer_checked(
            TransferCheckedParams(
                program_id=profile.token_program_id,
                source=source,
                mint=mint,
                dest=dest,
                owner=owner,
                amount=raw_amount,
                decimals=profile.decimals,
                signers=[],
            )
        )

    def build_create_associated_account(
        self,
        payer: Pubkey,
        owner: Pubkey,
        mint: Pubkey,
        token_program_id: Pubkey,
    ) -> BuiltTransaction:
        """
        Idempotent associated token account creation paid by payer

        The ledger succeeds without changes when the account already exists.

        Raises:
            ValidationError: token_program_id is neither Token nor Token-2022
        """
        address = associated_token_address(owner, mint, token_program_id)
        try:
            instruction = create_idempotent_associated_token_account(payer, owner, mint, token_program_id)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        return BuiltTransaction(
            instructions=(instruction,),
            fee_payer=payer,
            description=f"Create token account {address} for {owner}",
        )
