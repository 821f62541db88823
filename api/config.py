"""
API Configuration

Centralized settings for the FastAPI application.
API metadata is hardcoded, while environment-specific settings load from .env file.
"""

from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
from solders.pubkey import Pubkey

from api.enums import EnvironmentType
from solana_offchain.types import EnvironmentProfile


# Get the project root directory (one level up from api/)
PROJECT_ROOT = Path(__file__).parent.parent

TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM_ID = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"


class Settings(BaseSettings):
    """
    Application settings for the Solana transfer API

    API metadata (title, description, version) are hardcoded.
    Environment-specific settings are loaded from .env file.
    """

    # ============================================================================
    # API Metadata (hardcoded - versioned with code)
    # ============================================================================

    api_title: str = "Solana Transfer API"
    api_description: str = (
        "SOL and SPL token balance queries and transfers from the service wallet. "
        "Transfers are confirmed at finalized commitment before a signature is returned."
    )
    api_version: str = "1.0.0"
    API_V1_STR: str = "/api/v1"

    # ============================================================================
    # Environment Settings (loaded from .env)
    # ============================================================================

    environment: EnvironmentType = EnvironmentType.DEVELOPMENT
    api_port: int = 8000
    log_level: str = "INFO"

    api_key_dev: str  # No default - must be set in .env

    # Solana network
    solana_rpc_url: str = "https://api.devnet.solana.com"
    solana_network: str = "devnet"
    solana_rpc_timeout: float = 10.0

    # Service wallet and token
    solana_wallet_key_name: str = "WEB3_SOLANA_WALLET_PRIVATE_KEY"
    solana_wallet_key_password: SecretStr | None = None
    solana_wallet_key_salt: str | None = None
    solana_token_mint_address: str = ""

    # Token program and decimals per environment
    production_token_program_id: str = TOKEN_PROGRAM_ID
    production_token_decimals: int = 8
    development_token_program_id: str = TOKEN_2022_PROGRAM_ID
    development_token_decimals: int = 9

    # Submission loop
    token_max_retries: int = 10
    native_max_retries: int = 3
    account_creation_max_retries: int = 1
    confirmation_timeout_seconds: float = 8.0
    poll_interval_seconds: float = 0.5
    retry_delay_seconds: float = 1.0

    model_config = SettingsConfigDict(
        env_file=str(PROJECT_ROOT / ".env"), env_file_encoding="utf-8", case_sensitive=False, extra="ignore"
    )

    @property
    def is_development(self) -> bool:
        """Check if running in development mode"""
        return self.environment is EnvironmentType.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.environment is EnvironmentType.PRODUCTION

    def get_rpc_endpoint(self) -> str:
        return self.solana_rpc_url

    def get_mint_address(self) -> str:
        if not self.solana_token_mint_address:
            raise ValueError("Missing solana_token_mint_address setting")
        return self.solana_token_mint_address

    def get_environment_flag(self) -> EnvironmentType:
        return self.environment

    def environment_profile(self) -> EnvironmentProfile:
        """Token program and decimals for the active environment, always selected together"""
        if self.is_production:
            program_id, decimals = self.production_token_program_id, self.production_token_decimals
        else:
            program_id, decimals = self.development_token_program_id, self.development_token_decimals
        return EnvironmentProfile(
            name=self.environment.value,
            token_program_id=Pubkey.from_string(program_id),
            decimals=decimals,
        )


# ============================================================================
# Global settings instance
# ============================================================================

settings = Settings()  # type: ignore[call-arg]  # Pydantic settings loads from env
