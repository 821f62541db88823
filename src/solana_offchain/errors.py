"""
Solana Transfer Errors

Exception hierarchy shared by the offchain library and the API layer.
Validation and balance errors are raised before any transaction exists and are
never retried. Network, timeout and rejection errors are produced inside the
submission loop and only reach callers wrapped in RetryExhaustedError.
"""


class SolanaTransferError(Exception):
    """Base class for every error raised by the transfer library"""
    pass


class ValidationError(SolanaTransferError):
    """Request rejected before any network call (e.g. negative amount)"""
    pass


class InsufficientBalanceError(SolanaTransferError):
    """Sender balance is below the requested amount"""

    def __init__(self, balance, requested):
        self.balance = balance
        self.requested = requested
        super().__init__(f"Insufficient balance: have {balance}, requested {requested}")


class DerivationError(SolanaTransferError):
    """No valid program derived address exists for the given seeds"""
    pass


class NetworkError(SolanaTransferError):
    """RPC call failed (connection problem or node error)"""
    pass


class ConfirmationTimeoutError(SolanaTransferError):
    """Signature did not reach finalized status within one attempt window"""

    def __init__(self, signature: str, timeout: float):
        self.signature = signature
        self.timeout = timeout
        super().__init__(f"Transaction {signature} not finalized within {timeout:.1f}s")


class TransactionRejectedError(SolanaTransferError):
    """The ledger executed the transaction and reported an error"""

    def __init__(self, signature: str, reason):
        self.signature = signature
        self.reason = reason
        super().__init__(f"Transaction {signature} rejected by ledger: {reason}")


class RetryExhaustedError(SolanaTransferError):
    """Every submission attempt failed; terminal outcome of the retry loop"""

    def __init__(self, attempts: int, errors: list[Exception]):
        self.attempts = attempts
        self.errors = list(errors)
        last = f": {self.last_error}" if self.last_error else ""
        super().__init__(f"Transaction not confirmed after {attempts} attempts{last}")

    @property
    def last_error(self) -> Exception | None:
        """Cause of the final attempt, if any was recorded"""
        return self.errors[-1] if self.errors else None
