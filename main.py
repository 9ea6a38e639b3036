"""Main application entry point."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.api.error_handlers import validation_exception_handler
from src.api.routes import router
from src.utils.config import config
from src.utils.logger import StructuredLogger

logger = StructuredLogger("Application", file_path=config.logging.file_path, min_level=config.logging.level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events."""
    # Startup
    try:
        config.validate()
    except ValueError as e:
        logger.critical("Configuration error", exception=e)
        raise
    logger.info(
        "Application started",
        context={
            "default_time_range": config.chart.default_time_range,
            "market_timezone": config.chart.market_timezone,
            "reference_price_policy": config.chart.reference_price_policy,
        },
    )
    yield
    # Shutdown


# Create FastAPI app
app = FastAPI(
    title="Stock Insight Dashboard",
    description="Stock quotes, price charts and Black-Scholes option pricing",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Include API routes
app.include_router(router, prefix="/api", tags=["dashboard"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Serve static files from frontend dist directory
frontend_dist = Path(__file__).parent / "frontend" / "dist"
if frontend_dist.exists():
    app.mount("/", StaticFiles(directory=str(frontend_dist), html=True), name="static")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
