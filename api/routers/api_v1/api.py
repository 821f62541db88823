from fastapi import APIRouter, Security

from api.routers.api_v1.endpoints import solana
from api.utils.security import get_api_key


api_router = APIRouter()

api_router.include_router(
    solana.router, prefix="/solana", tags=["Solana"], dependencies=[Security(get_api_key)]
)
