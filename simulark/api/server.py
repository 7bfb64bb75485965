import logging
from contextlib import asynccontextmanager

import httpx
from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from simulark import __version__
from simulark.api.middleware.rate_limit import limiter
from simulark.api.routes import generate, health
from simulark.common import logging_config, tracing
from simulark.config.default_config import CONFIG
from simulark.engine.orchestrator import GenerationOrchestrator

logging_config.setup_json_logging()
logger = logging.getLogger("Simulark")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manages the application lifecycle (startup and shutdown).

    Builds the provider registry, the process-wide circuit breaker store and
    the orchestrator around one shared httpx.AsyncClient, and closes the
    client on shutdown.
    """
    logger.info("Initializing Simulark...")
    app.state.config = CONFIG
    tracing.setup_tracing()
    FastAPIInstrumentor.instrument_app(app)

    logger.info("Creating a shared httpx.AsyncClient...")
    app.state.http_client = httpx.AsyncClient(timeout=60.0)

    app.state.orchestrator = GenerationOrchestrator.from_config(CONFIG, http_client=app.state.http_client)
    app.state.registry = app.state.orchestrator.registry
    app.state.circuit_breaker = app.state.orchestrator.breaker
    logger.info(
        f"Application initialized. Primary: {app.state.registry.primary}, "
        f"fallback: {app.state.registry.fallback}"
    )
    yield
    logger.info("Shutting down...")
    logger.info("Closing the shared httpx.AsyncClient...")
    await app.state.http_client.aclose()
    logger.info("Application stopped.")


app = FastAPI(title="Simulark Architecture Generator", version=__version__, lifespan=lifespan)

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "details": jsonable_encoder(exc.errors())},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(generate.router)
app.include_router(health.router)
