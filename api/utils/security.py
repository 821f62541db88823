import secrets
from typing import Annotated

from fastapi import HTTPException, status
from fastapi.params import Security
from fastapi.security import APIKeyHeader

from api.config import settings


api_key_header_scheme = APIKeyHeader(name="x-api-key", auto_error=False)


def get_api_key(api_key_header: Annotated[str | None, Security(api_key_header_scheme)]) -> str:
    """Validate the API key sent in the x-api-key header.

    Args:
        api_key_header: The API key passed in the HTTP header.

    Returns:
        The validated API key.

    Raises:
        HTTPException: If the API key is invalid or missing.
    """
    if api_key_header and secrets.compare_digest(api_key_header, settings.api_key_dev):
        return api_key_header
    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing API Key")
