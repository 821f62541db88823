import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import APIRouter, FastAPI
from fastapi.responses import HTMLResponse, JSONResponse


# Load environment variables from .env file
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"
load_dotenv(ENV_FILE)

from api.config import settings
from api.routers.api_v1.api import api_router


# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Logs the active configuration on startup.
    """
    profile = settings.environment_profile()
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")
    logger.info(f"Environment: {settings.environment.value}")
    logger.info(f"Network: {settings.solana_network} ({settings.get_rpc_endpoint()})")
    logger.info(f"Token program: {profile.token_program_id} ({profile.decimals} decimals)")
    logger.info(f"Token mint configured: {'Yes' if settings.solana_token_mint_address else 'No'}")

    yield  # Application runs here

    logger.info("Shutting down API")


app = FastAPI(
    title=settings.api_title,
    description=settings.api_description,
    version=settings.api_version,
    lifespan=lifespan,
)

root_router = APIRouter()


@app.get("/")
async def root():
    """Basic HTML response."""
    body = (
        "<html>"
        "<body style='padding: 10px;'>"
        "<h1>Welcome to the Solana Transfer API</h1>"
        "<div>"
        "Check the docs: <a href='/docs'>here</a>"
        "</div>"
        "</body>"
        "</html>"
    )

    return HTMLResponse(content=body)


@app.get("/health")
async def health_check():
    """
    Health check endpoint.

    Returns:
        - status: "healthy"
        - api_version: API version
        - environment: Current environment
        - network: Solana cluster and token profile
    """
    profile = settings.environment_profile()
    health_status = {
        "status": "healthy",
        "api_version": settings.api_version,
        "environment": settings.environment.value,
        "network": {
            "cluster": settings.solana_network,
            "token_program_id": str(profile.token_program_id),
            "token_decimals": profile.decimals,
        },
    }
    return JSONResponse(content=health_status, status_code=200)


app.include_router(root_router)
app.include_router(api_router, prefix=settings.API_V1_STR)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=settings.api_port,
        reload=settings.is_development,
    )
