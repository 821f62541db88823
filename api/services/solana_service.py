"""
Solana Service

Business logic behind the Solana endpoints. Resolves configuration and the
service wallet key for every call, then delegates to the offchain
TransferService.
"""

import logging
from decimal import Decimal

from api.config import Settings
from api.services.secret_store import SecretStore
from solana_offchain.accounts import AccountProvisioner
from solana_offchain.chain_context import SolanaChainContext
from solana_offchain.submission import SubmissionOrchestrator
from solana_offchain.transactions import TransactionBuilder
from solana_offchain.transfers import TransferService
from solana_offchain.types import AssetKind, TransferRequest, TransferResult
from solana_offchain.wallet import SigningAccount


logger = logging.getLogger(__name__)


class SolanaService:
    """Balance and transfer operations for the configured service wallet and token"""

    def __init__(self, settings: Settings, secret_store: SecretStore, transfer_service: TransferService):
        self.settings = settings
        self.secret_store = secret_store
        self.transfer_service = transfer_service

    @classmethod
    def from_settings(cls, settings: Settings, secret_store: SecretStore | None = None) -> "SolanaService":
        """Wire the offchain components from configuration"""
        chain_context = SolanaChainContext(
            rpc_url=settings.get_rpc_endpoint(),
            network=settings.solana_network,
            timeout=settings.solana_rpc_timeout,
        )
        orchestrator = SubmissionOrchestrator(
            poll_interval=settings.poll_interval_seconds,
            confirmation_timeout=settings.confirmation_timeout_seconds,
            retry_delay=settings.retry_delay_seconds,
        )
        builder = TransactionBuilder()
        provisioner = AccountProvisioner(
            builder, orchestrator, creation_max_retries=settings.account_creation_max_retries
        )
        transfer_service = TransferService(
            chain_context,
            settings.environment_profile(),
            orchestrator=orchestrator,
            builder=builder,
            provisioner=provisioner,
            token_max_retries=settings.token_max_retries,
            native_max_retries=settings.native_max_retries,
        )
        if secret_store is None:
            secret_store = SecretStore(
                password=settings.solana_wallet_key_password,
                salt=settings.solana_wallet_key_salt,
            )
        return cls(settings, secret_store, transfer_service)

    def _service_account(self) -> SigningAccount:
        material = self.secret_store.get_private_key_material(self.settings.solana_wallet_key_name)
        return SigningAccount.from_secret(material)

    def get_explorer_url(self, signature: str) -> str:
        return self.transfer_service.chain_context.get_explorer_url(signature)

    def get_service_address(self) -> str:
        with self._service_account() as account:
            return account.address

    def get_solana_balance(self, address: str) -> Decimal:
        """SOL balance of address"""
        return self.transfer_service.get_balance(address)

    def get_spl_balance(self, address: str) -> Decimal:
        """Balance of the configured token held by address"""
        return self.transfer_service.get_token_balance(address, self.settings.get_mint_address())

    def transfer_spl(self, recipient: str, amount: Decimal) -> TransferResult:
        """
        Send the configured token from the service wallet

        Production uses the Token program, development uses Token-2022; the
        decimals follow the same selection.
        """
        mint = self.settings.get_mint_address()
        with self._service_account() as sender:
            logger.info(f"SPL transfer requested: {amount} to {recipient} from {sender.address}")
            request = TransferRequest(
                sender=sender, recipient=recipient, amount=amount, asset=AssetKind.TOKEN, mint=mint
            )
            return self.transfer_service.transfer_token(request)

    def transfer_solana(self, recipient: str, amount: Decimal) -> TransferResult:
        """Send SOL from the service wallet"""
        with self._service_account() as sender:
            logger.info(f"SOL transfer requested: {amount} to {recipient} from {sender.address}")
            request = TransferRequest(sender=sender, recipient=recipient, amount=amount, asset=AssetKind.NATIVE)
            return self.transfer_service.transfer_native(request)
