"""
Wanderlist API - Main Application Entry Point
"""
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse, Response
from pymongo.errors import PyMongoError
import time
import logging

# Prometheus metrics
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST, REGISTRY

from app.config import settings

# Define Prometheus metrics
REQUEST_COUNT = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status']
)

REQUEST_LATENCY = Histogram(
    'http_request_duration_seconds',
    'HTTP request latency in seconds',
    ['method', 'endpoint']
)
from app.routers import admin, auth, destinations, health, lists, users
from app.services.destination_catalog import DestinationCatalog
from app.utils.errors import Internal, InvalidRequest, WanderlistError
from app.utils.mongodb import init_mongodb, close_mongodb

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager - handles startup and shutdown events
    """
    # Startup
    logger.info("Starting Wanderlist API...")

    # The catalog is loaded once and never mutated afterwards
    app.state.catalog = DestinationCatalog.load(Path(settings.DESTINATIONS_CSV_PATH))

    await init_mongodb()

    logger.info("Wanderlist API ready to serve requests!")

    yield

    # Shutdown
    logger.info("Shutting down Wanderlist API...")

    await close_mongodb()

    logger.info("Cleanup completed")


# Create FastAPI application
app = FastAPI(
    title="Wanderlist API",
    description="""
    ## Destination Discovery & List Sharing API

    Search European destinations with typo-tolerant matching, collect them
    into named lists, share lists publicly and review other travellers' lists.

    ### Authentication
    This API uses JWT Bearer tokens for authentication.
    Include the token in the Authorization header: `Bearer <token>`
    """,
    version="1.0.0",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    openapi_url="/openapi.json" if settings.DEBUG else None,
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
)

# CORS Middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware with Prometheus metrics
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    # Record metrics (skip /metrics endpoint to avoid recursion)
    if request.url.path != "/metrics":
        endpoint = request.url.path
        method = request.method
        status = response.status_code

        REQUEST_COUNT.labels(method=method, endpoint=endpoint, status=status).inc()
        REQUEST_LATENCY.labels(method=method, endpoint=endpoint).observe(process_time)

    response.headers["X-Process-Time"] = str(process_time)
    return response


# Error handlers
@app.exception_handler(WanderlistError)
async def wanderlist_error_handler(request: Request, exc: WanderlistError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected ({exc.code}): {exc.message}")
    return ORJSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    error = InvalidRequest(message, context={"errors": [
        {"loc": list(e.get("loc", ())), "msg": e.get("msg")} for e in errors
    ]})
    return ORJSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(PyMongoError)
async def storage_error_handler(request: Request, exc: PyMongoError):
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}", exc_info=True)
    error = Internal("Storage operation failed.")
    return ORJSONResponse(status_code=error.status_code, content=error.to_dict())


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(destinations.router, prefix="/destinations", tags=["Destinations"])
app.include_router(lists.router, prefix="/lists", tags=["Lists"])
app.include_router(admin.router, prefix="/admin", tags=["Admin"])


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint - API information"""
    return {
        "name": settings.APP_NAME,
        "version": "1.0.0",
        "status": "running",
        "docs": "/docs" if settings.DEBUG else "disabled",
    }


@app.get("/metrics", include_in_schema=False)
async def metrics():
    """Prometheus metrics endpoint"""
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST
    )
