from contextlib import asynccontextmanager
import logging
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from BomSourcer import __version__
from BomSourcer.routers import parts_search_routes, config_routes, bom_routes
from BomSourcer.handlers.exception_handlers import register_exception_handlers
from BomSourcer.services.parts_search_service import shutdown_parts_search_service
from BomSourcer.utils.env_credentials import list_available_env_credentials

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting BomSourcer...")
    available = list_available_env_credentials()
    if available:
        for supplier, fields in available.items():
            logger.info(f"Credentials found for {supplier}: {', '.join(fields)}")
    else:
        logger.info("No supplier credentials in environment; only JLCPCB will be searched")

    yield

    logger.info("Shutting down, closing supplier sessions...")
    await shutdown_parts_search_service()


app = FastAPI(
    title="BomSourcer",
    description="Multi-supplier electronic part search and BOM auto-sourcing.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Register exception handlers
register_exception_handlers(app)

# Get CORS origins from environment variable
cors_origins = os.getenv("CORS_ORIGINS", "*")
cors_origins_list = [origin.strip() for origin in cors_origins.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins_list,
    allow_credentials="*" not in cors_origins_list,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(parts_search_routes.router, prefix="/api", tags=["Parts Search"])
app.include_router(config_routes.router, prefix="/api", tags=["Configuration"])
app.include_router(bom_routes.router, prefix="/api", tags=["BOM"])


@app.get("/health", tags=["Health"])
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    host = os.getenv("SERVER_HOST", "0.0.0.0")
    port = int(os.getenv("SERVER_PORT", "8080"))
    logger.info(f"Starting BomSourcer on {host}:{port}")
    uvicorn.run("BomSourcer.main:app", host=host, port=port)
