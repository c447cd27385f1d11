import asyncio
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from myip.config import settings
from myip.routers import address, health
from myip.domain.errors import DomainError, BackendUnavailableError
from myip.dependencies import close_resources, get_cache_store, get_registry_lookup
from myip.logging_config import configure_logging

logger = logging.getLogger(__name__)

STARTUP_PING_TIMEOUT = 5.0

app = FastAPI(
    title="myip",
    description="Caller IP address with cached RDAP registry data",
    version=settings.VERSION,
)

# Configure logging and verify the store on startup; a dead store aborts startup
@app.on_event("startup")
async def startup_event():
    configure_logging(settings)
    try:
        await asyncio.wait_for(get_cache_store().ping(), STARTUP_PING_TIMEOUT)
    except asyncio.TimeoutError as exc:
        logger.critical(f"store error: ping timed out after {STARTUP_PING_TIMEOUT}s")
        raise BackendUnavailableError(f"ping timed out after {STARTUP_PING_TIMEOUT}s") from exc
    except BackendUnavailableError as exc:
        logger.critical(f"store error: {exc}")
        raise
    if get_registry_lookup() is None:
        logger.info("RDAP_API is not set, registry lookups disabled")
    logger.info(f"listening on {settings.API_HOST}:{settings.API_PORT}")


@app.on_event("shutdown")
async def shutdown_event():
    await close_resources()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Allows all origins
    allow_methods=["*"],
    allow_headers=["*"],  # Allows all headers
)


# Domain errors escaping a route, e.g. a bad STORE_TYPE while wiring dependencies
@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    logger.error(f"unhandled domain error: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})

# Include routers
app.include_router(health.router, tags=["Health"])  # Health check endpoints first
app.include_router(address.router, tags=["Address"])
