"""
Transaction Submission

Send, confirm and retry loop for built transactions.

Each attempt signs the transaction with a fresh blockhash, sends it, and polls
getSignatureStatuses until the signature is finalized or the attempt window
closes. Failed attempts are retried after a fixed delay until max_retries
attempts have been made; the caller then gets a single RetryExhaustedError.

A signature that times out may still finalize later on the ledger. The next
attempt is a new transaction, so a late finalization of an earlier attempt can
move funds twice. This race is accepted.
"""

import logging
import time
from typing import Callable, Optional, Sequence

from solders.transaction import Transaction

from .chain_context import LedgerClient
from .errors import ConfirmationTimeoutError, NetworkError, RetryExhaustedError, TransactionRejectedError
from .types import BuiltTransaction, ConfirmationOutcome, Finalized, Rejected, SubmissionState, TimedOut
from .wallet import SigningAccount


logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 3
DEFAULT_POLL_INTERVAL = 0.5
DEFAULT_CONFIRMATION_TIMEOUT = 8.0
DEFAULT_RETRY_DELAY = 1.0


class SubmissionOrchestrator:
    """Bounded submit-retry-confirm state machine"""

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        confirmation_timeout: float = DEFAULT_CONFIRMATION_TIMEOUT,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        on_transition: Optional[Callable[[SubmissionState], None]] = None,
    ):
        """
        Args:
            max_retries: Attempts made before giving up (at least 1)
            poll_interval: Seconds between signature status polls
            confirmation_timeout: Seconds one attempt waits for finality
            retry_delay: Seconds slept between a failed attempt and the next one
            clock: Monotonic time source, injectable for tests
            sleep: Sleep function, injectable for tests
            on_transition: Optional observer called with every state entered
        """
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self.max_retries = max_retries
        self.poll_interval = poll_interval
        self.confirmation_timeout = confirmation_timeout
        self.retry_delay = retry_delay
        self.clock = clock
        self.sleep = sleep
        self.on_transition = on_transition

    def _enter(self, state: SubmissionState) -> SubmissionState:
        logger.debug(f"Submission state -> {state.value}")
        if self.on_transition is not None:
            self.on_transition(state)
        return state

    def submit(
        self,
        ledger: LedgerClient,
        built: BuiltTransaction,
        signers: Sequence[SigningAccount],
        max_retries: Optional[int] = None,
    ) -> str:
        """
        Submit a built transaction until it is finalized

        Args:
            ledger: Open RPC connection
            built: Instructions and fee payer
            signers: Accounts whose signatures the instructions require
            max_retries: Override of the configured attempt bound

        Returns:
            Signature observed at finalized commitment

        Raises:
            RetryExhaustedError: All attempts failed; carries each attempt's cause
        """
        bound = self.max_retries if max_retries is None else max_retries
        if bound < 1:
            raise ValueError("max_retries must be at least 1")

        state = self._enter(SubmissionState.NOT_SENT)
        errors: list[Exception] = []
        attempt = 0

        while True:
            if state is SubmissionState.ATTEMPT_FAILED:
                if attempt >= bound:
                    self._enter(SubmissionState.FAILED)
                    logger.error(f"{built.description or 'Transaction'} not confirmed after {attempt} attempts")
                    raise RetryExhaustedError(attempt, errors)
                logger.info(f"Retrying transaction... (attempt {attempt + 1} of {bound})")
                self.sleep(self.retry_delay)

            attempt += 1
            state = self._enter(SubmissionState.SUBMITTING)
            outcome = self._attempt(ledger, built, signers, attempt)

            if isinstance(outcome, Finalized):
                self._enter(SubmissionState.FINALIZED)
                logger.info(f"Transaction confirmed as finalized on attempt {attempt}: {outcome.signature}")
                return outcome.signature

            errors.append(outcome.cause)
            state = self._enter(SubmissionState.ATTEMPT_FAILED)

    def _attempt(
        self,
        ledger: LedgerClient,
        built: BuiltTransaction,
        signers: Sequence[SigningAccount],
        attempt: int,
    ) -> ConfirmationOutcome:
        try:
            blockhash = ledger.get_latest_blockhash()
            transaction = Transaction.new_signed_with_payer(
                list(built.instructions),
                built.fee_payer,
                [signer.keypair for signer in signers],
                blockhash,
            )
            signature = ledger.send_transaction(transaction)
        except NetworkError as e:
            logger.warning(f"Transaction sending failed on attempt {attempt}: {e}")
            return Rejected(cause=e)

        logger.info(f"Transaction sent on attempt {attempt} with signature: {signature}")
        self._enter(SubmissionState.AWAITING_CONFIRMATION)
        return self.wait_for_confirmation(ledger, signature)

    def wait_for_confirmation(self, ledger: LedgerClient, signature: str) -> ConfirmationOutcome:
        """
        Poll a signature until finalized, rejected or the attempt window closes

        Status lookup failures are logged and polling continues; only the
        window bounds the wait.
        """
        start = self.clock()
        while self.clock() - start < self.confirmation_timeout:
            try:
                statuses = ledger.get_signature_statuses([signature])
            except NetworkError as e:
                logger.warning(f"Status lookup for {signature} failed: {e}")
                statuses = []

            status = statuses[0] if statuses else None
            if status is not None:
                if status.err is not None:
                    logger.warning(f"Transaction {signature} failed on ledger: {status.err}")
                    return Rejected(cause=TransactionRejectedError(signature, status.err), signature=signature)
                if status.finalized:
                    logger.info(f"Transaction {signature} confirmed as finalized.")
                    return Finalized(signature)

            self.sleep(self.poll_interval)

        logger.warning(f"Timeout reached. Transaction {signature} not finalized.")
        return TimedOut(signature, ConfirmationTimeoutError(signature, self.confirmation_timeout))
