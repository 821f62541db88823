"""
Transfer Schemas

Pydantic models for Solana balance and transfer API requests and responses.
"""

from decimal import Decimal

from pydantic import BaseModel, Field

from api.enums import AssetType


# ============================================================================
# Balance Schemas
# ============================================================================


class BalanceResponse(BaseModel):
    """Balance of one address"""

    address: str = Field(description="Wallet address")
    asset: AssetType = Field(description="Asset the balance is expressed in")
    balance: Decimal = Field(description="Balance in human units (SOL or tokens)")
    mint: str | None = Field(None, description="Token mint (SPL balances only)")


# ============================================================================
# Transfer Schemas
# ============================================================================


class TransferRequestBody(BaseModel):
    """Request to send SOL or the configured SPL token from the service wallet"""

    recipient: str = Field(min_length=32, max_length=44, description="Recipient wallet address (base58)")
    amount: Decimal = Field(ge=0, description="Amount in human units (must be >= 0)")


class TransferTokenResponse(BaseModel):
    """Response for a finalized transfer"""

    tx: str = Field(description="Transaction signature")
    asset: AssetType = Field(description="Asset that was transferred")
    explorer_url: str | None = Field(None, description="Blockchain explorer URL")


class TransferErrorResponse(BaseModel):
    """Error response for transfer operations"""

    detail: str = Field(description="Error message")
