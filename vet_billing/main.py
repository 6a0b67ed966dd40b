from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from vet_billing.config import get_settings
from vet_billing.services.store import get_store

# Import routers directly from submodules
from vet_billing.data_view import router as data_view_router
from vet_billing.health import router as health_router
from vet_billing.routes.factura import router as factura_router
from vet_billing.routes.servicio import router as servicio_router


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once, at the level named in settings."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=numeric_level,
            format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        )
    else:
        root_logger.setLevel(numeric_level)


settings = get_settings()

# Configure logging as soon as the module is loaded
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    # --- Startup Logic ---
    logger.info("Application settings on startup: %s", settings.model_dump())

    # Build the shared store up front so the first request does not pay for it
    store = get_store()
    logger.info(
        "Application startup complete (%d services, %d invoices).",
        store.servicios.count(),
        store.facturas.count(),
    )

    try:
        yield  # The application is now running
    finally:
        # --- Shutdown Logic ---
        logger.info("Application shutdown complete.")


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 Bad Request."""
    logger.debug("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    # The rejected input is left out: NaN and Infinity cannot be encoded as JSON.
    errors = [
        {key: value for key, value in error.items() if key != "input"}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(errors)},
    )


# --- Application Setup ---

app = FastAPI(
    title=settings.app_name,
    lifespan=lifespan,
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, request_validation_handler)

# --- Include Routers ---

app.include_router(servicio_router, prefix=f"{settings.api_prefix}/servicio", tags=["servicio"])
app.include_router(factura_router, prefix=f"{settings.api_prefix}/factura", tags=["factura"])
app.include_router(health_router)
if settings.enable_data_view:
    app.include_router(data_view_router)


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
