"""
Solana Endpoints

FastAPI endpoints for SOL and SPL token balances and transfers from the
service wallet. Endpoints are sync: transfers block until the transaction is
finalized, so they run in the threadpool.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path

from api.dependencies.solana import get_solana_service
from api.enums import AssetType
from api.schemas.transfer import BalanceResponse, TransferErrorResponse, TransferRequestBody, TransferTokenResponse
from api.services.secret_store import SecretNotFoundError
from api.services.solana_service import SolanaService
from solana_offchain.errors import (
    DerivationError,
    InsufficientBalanceError,
    NetworkError,
    RetryExhaustedError,
    SolanaTransferError,
    ValidationError,
)


logger = logging.getLogger(__name__)

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": TransferErrorResponse, "description": "Invalid request or insufficient balance"},
    401: {"model": TransferErrorResponse, "description": "Invalid or missing API Key"},
    502: {"model": TransferErrorResponse, "description": "Solana RPC node unreachable or failing"},
    504: {"model": TransferErrorResponse, "description": "Transaction not finalized after all retries"},
}


def _to_http_error(error: Exception) -> HTTPException:
    """Translate library errors into HTTP errors"""
    if isinstance(error, (ValidationError, InsufficientBalanceError)):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, DerivationError):
        return HTTPException(status_code=422, detail=str(error))
    if isinstance(error, NetworkError):
        return HTTPException(status_code=502, detail=str(error))
    if isinstance(error, RetryExhaustedError):
        return HTTPException(status_code=504, detail=str(error))
    if isinstance(error, (SecretNotFoundError, ValueError)):
        return HTTPException(status_code=500, detail=f"Service misconfigured: {error}")
    return HTTPException(status_code=500, detail=str(error))


@router.get(
    "/balances/{address}",
    response_model=BalanceResponse,
    summary="Get SOL balance",
    responses=ERROR_RESPONSES,
)
def get_solana_balance(
    address: str = Path(description="Wallet address (base58)"),
    service: SolanaService = Depends(get_solana_service),
) -> BalanceResponse:
    """Get the SOL balance of an address."""
    try:
        balance = service.get_solana_balance(address)
    except (SolanaTransferError, ValueError) as e:
        raise _to_http_error(e) from e
    return BalanceResponse(address=address, asset=AssetType.SOL, balance=balance)


@router.get(
    "/token-balances/{address}",
    response_model=BalanceResponse,
    summary="Get SPL token balance",
    responses=ERROR_RESPONSES,
)
def get_spl_balance(
    address: str = Path(description="Wallet address (base58)"),
    service: SolanaService = Depends(get_solana_service),
) -> BalanceResponse:
    """
    Get the balance of the configured SPL token held by an address.

    Returns zero when the address has no token account yet.
    """
    try:
        balance = service.get_spl_balance(address)
        mint = service.settings.get_mint_address()
    except (SolanaTransferError, ValueError) as e:
        raise _to_http_error(e) from e
    return BalanceResponse(address=address, asset=AssetType.SPL, balance=balance, mint=mint)


@router.post(
    "/transfers/sol",
    response_model=TransferTokenResponse,
    summary="Send SOL",
    responses=ERROR_RESPONSES,
)
def transfer_solana(
    request: TransferRequestBody,
    service: SolanaService = Depends(get_solana_service),
) -> TransferTokenResponse:
    """
    Send SOL from the service wallet.

    Returns once the transaction is finalized.
    """
    try:
        result = service.transfer_solana(request.recipient, request.amount)
    except (SolanaTransferError, SecretNotFoundError, ValueError) as e:
        logger.error(f"SOL transfer to {request.recipient} failed: {e}")
        raise _to_http_error(e) from e
    return TransferTokenResponse(
        tx=result.signature, asset=AssetType.SOL, explorer_url=service.get_explorer_url(result.signature)
    )


@router.post(
    "/transfers/spl",
    response_model=TransferTokenResponse,
    summary="Send SPL token",
    responses=ERROR_RESPONSES,
)
def transfer_spl(
    request: TransferRequestBody,
    service: SolanaService = Depends(get_solana_service),
) -> TransferTokenResponse:
    """
    Send the configured SPL token from the service wallet.

    Missing token accounts are created, paid by the service wallet.
    Returns once the transaction is finalized.
    """
    try:
        result = service.transfer_spl(request.recipient, request.amount)
    except (SolanaTransferError, SecretNotFoundError, ValueError) as e:
        logger.error(f"SPL transfer to {request.recipient} failed: {e}")
        raise _to_http_error(e) from e
    return TransferTokenResponse(
        tx=result.signature, asset=AssetType.SPL, explorer_url=service.get_explorer_url(result.signature)
    )
