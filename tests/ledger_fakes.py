"""
Fake Ledger Objects

In-memory stand-ins for the Solana RPC boundary, used to test the transfer
components without a node.
"""

from solders.hash import Hash
from solders.pubkey import Pubkey
from solders.transaction import Transaction

from solana_offchain.addresses import ASSOCIATED_TOKEN_PROGRAM_ID
from solana_offchain.chain_context import SignatureStatus
from solana_offchain.errors import NetworkError


TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
TOKEN_2022_PROGRAM_ID = Pubkey.from_string("TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb")
FINALIZED = SignatureStatus(confirmation_status="finalized")
CONFIRMED = SignatureStatus(confirmation_status="confirmed")


class FakeLedger:
    """Records every RPC call and simulates balances, accounts and statuses"""

    def __init__(self):
        self.lamports: dict[Pubkey, int] = {}
        self.token_accounts: dict[Pubkey, int] = {}
        self.calls: list[str] = []
        self.sent: list[Transaction] = []
        self.send_errors: list[Exception] = []
        self.always_fail_send: Exception | None = None
        self.status_script: list = []
        self.default_status: SignatureStatus | None = FINALIZED
        self.status_errors: list[Exception] = []
        self.create_accounts = True

    # RPC boundary

    def get_balance(self, address: Pubkey) -> int:
        self.calls.append("get_balance")
        return self.lamports.get(address, 0)

    def get_token_account_balance(self, address: Pubkey) -> int:
        self.calls.append("get_token_account_balance")
        if address not in self.token_accounts:
            raise NetworkError(f"could not find account {address}")
        return self.token_accounts[address]

    def get_account_info(self, address: Pubkey):
        self.calls.append("get_account_info")
        return object() if address in self.token_accounts else None

    def get_latest_blockhash(self) -> Hash:
        self.calls.append("get_latest_blockhash")
        return Hash.default()

    def send_transaction(self, transaction: Transaction) -> str:
        self.calls.append("send_transaction")
        if self.always_fail_send is not None:
            raise self.always_fail_send
        if self.send_errors:
            raise self.send_errors.pop(0)

        self.sent.append(transaction)
        if self.create_accounts:
            self._apply_account_creation(transaction)
        return str(transaction.signatures[0])

    def get_signature_statuses(self, signatures):
        self.calls.append("get_signature_statuses")
        if self.status_errors:
            raise self.status_errors.pop(0)
        if self.status_script:
            status = self.status_script.pop(0)
        else:
            status = self.default_status
        return [status for _ in signatures]

    # Helpers

    @property
    def sends(self) -> int:
        return self.calls.count("send_transaction")

    def _apply_account_creation(self, transaction: Transaction) -> None:
        message = transaction.message
        for ix in message.instructions:
            program = message.account_keys[ix.program_id_index]
            if program == ASSOCIATED_TOKEN_PROGRAM_ID:
                address = message.account_keys[ix.accounts[1]]
                self.token_accounts.setdefault(address, 0)


class FakeChainContext:
    """Chain context handing out the same fake ledger on every connect"""

    def __init__(self, ledger: FakeLedger, network: str = "devnet"):
        self.ledger = ledger
        self.network = network
        self.connections = 0

    def connect(self) -> FakeLedger:
        self.connections += 1
        return self.ledger

    def get_explorer_url(self, signature: str) -> str:
        return f"https://explorer.solana.com/tx/{signature}?cluster={self.network}"


class FakeClock:
    """Monotonic clock advanced only by sleep()"""

    def __init__(self):
        self.now = 0.0
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
