import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import APIRouter, Depends, FastAPI
from fastapi.responses import HTMLResponse, JSONResponse


# Load environment variables from .env file
PROJECT_ROOT = Path(__file__).parent.parent
ENV_FILE = PROJECT_ROOT / ".env"
load_dotenv(ENV_FILE)

from api.config import settings
from api.dependencies.chain_context import close_chain_context, get_chain_context, get_solana_settings
from api.routers.api_v1.api import api_router
from api.utils.security import generate_api_key
from solana_offchain import SolanaChainContext


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

    Logs the configured cluster on startup and closes the RPC session on shutdown.
    """
    solana_settings = get_solana_settings()
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Network: {solana_settings.network} ({solana_settings.rpc_url})")
    logger.info(f"Program: {solana_settings.program_id}")
    logger.info(f"Admin API Key configured: {'Yes' if settings.admin_api_key else 'No'}")

    yield  # Application runs here

    logger.info("Shutting down API")
    await close_chain_context()


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
        "<h1>Welcome to the Solana Crowdfunding API</h1>"
        "<div>"
        "Check the docs: <a href='/docs'>here</a>"
        "</div>"
        "</body>"
        "</html>"
    )

    return HTMLResponse(content=body)


@app.get("/generate-api-key")
async def get_new_api_key():
    api_key = generate_api_key()

    return {"api_key": api_key}


@app.get("/health")
async def health_check(chain_context: SolanaChainContext = Depends(get_chain_context)):
    """
    Health check endpoint that tests RPC connectivity.

    Returns:
        - status: "healthy" if the RPC node answers
        - network: cluster configuration
        - api_version: API version
        - environment: Current environment
    """
    health_status = {
        "status": "healthy",
        "api_version": settings.api_version,
        "environment": settings.environment,
        "network": chain_context.get_network_info(),
    }

    try:
        health_status["network"]["connected"] = await chain_context.get_client().is_connected()
    except Exception as e:
        health_status["network"]["connected"] = False
        health_status["network"]["error"] = str(e)

    if not health_status["network"]["connected"]:
        health_status["status"] = "unhealthy"
        return JSONResponse(content=health_status, status_code=503)

    return JSONResponse(content=health_status, status_code=200)


app.include_router(root_router)
app.include_router(api_router, prefix=settings.API_V1_STR)
