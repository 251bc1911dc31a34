"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from cryptowallet.config.settings import get_settings
from cryptowallet.config.logging_config import setup_logging
from cryptowallet.repositories.sqlalchemy.database import init_db
from cryptowallet.api.deps import reset_price_fetcher
from cryptowallet.api.routers import prices_router, wallet_router, trades_router
from cryptowallet.core.exceptions import AppError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    yield
    # Shutdown
    reset_price_fetcher()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Crypto wallet backend with resilient live pricing",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(prices_router)
app.include_router(wallet_router)
app.include_router(trades_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    status_code = 404 if exc.code == "NOT_FOUND" else 400
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
