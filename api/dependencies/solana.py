"""
Solana Service Dependency

FastAPI dependency for accessing the SolanaService built from settings.
"""

from fastapi import HTTPException

from api.config import settings
from api.services.solana_service import SolanaService


# Global state for the service (stateless between calls)
_solana_service: SolanaService | None = None


def get_solana_service() -> SolanaService:
    """
    Get or initialize the Solana service.

    Returns:
        SolanaService: Service wired from the global settings

    Raises:
        HTTPException: If the configuration cannot produce a service
    """
    global _solana_service
    if _solana_service is None:
        try:
            _solana_service = SolanaService.from_settings(settings)
        except ValueError as e:
            raise HTTPException(status_code=500, detail=f"Invalid Solana configuration: {e}")
    return _solana_service
