"""
Solana Transfer Types

Value objects passed between the transfer components.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Optional, Union

from solders.instruction import Instruction
from solders.pubkey import Pubkey


if TYPE_CHECKING:
    from .wallet import SigningAccount


class AssetKind(str, Enum):
    """Kind of balance being moved"""

    NATIVE = "native"
    TOKEN = "token"


class SubmissionState(str, Enum):
    """
    Submission lifecycle

    NOT_SENT -> SUBMITTING -> AWAITING_CONFIRMATION -> FINALIZED | ATTEMPT_FAILED
    ATTEMPT_FAILED -> SUBMITTING while attempts remain, otherwise FAILED
    """

    NOT_SENT = "not_sent"
    SUBMITTING = "submitting"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    ATTEMPT_FAILED = "attempt_failed"
    FINALIZED = "finalized"
    FAILED = "failed"


@dataclass(frozen=True)
class EnvironmentProfile:
    """Token program and decimal precision used together for one environment"""

    name: str
    token_program_id: Pubkey
    decimals: int


@dataclass(frozen=True)
class TransferRequest:
    sender: "SigningAccount"
    recipient: str
    amount: Decimal
    asset: AssetKind = AssetKind.NATIVE
    mint: Optional[str] = None

    def __post_init__(self):
        if self.asset is AssetKind.TOKEN and not self.mint:
            raise ValueError("Token transfers require a mint address")


@dataclass(frozen=True)
class DerivedAccountRecord:
    address: Pubkey
    exists_on_ledger: bool
    raw_balance: int = 0


@dataclass(frozen=True)
class BuiltTransaction:
    """Ordered instructions plus the account paying fees; signed at submission time"""

    instructions: tuple[Instruction, ...]
    fee_payer: Pubkey
    description: str = ""


@dataclass(frozen=True)
class TransferResult:
    signature: str


# Per-attempt confirmation outcomes consumed by the submission loop


@dataclass(frozen=True)
class Finalized:
    signature: str


@dataclass(frozen=True)
class TimedOut:
    signature: str
    cause: Exception


@dataclass(frozen=True)
class Rejected:
    cause: Exception
    signature: Optional[str] = None


ConfirmationOutcome = Union[Finalized, TimedOut, Rejected]
