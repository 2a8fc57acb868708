"""
Trip Indo API - Main Application Entry Point
"""
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
import time
import logging

# Prometheus metrics
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST, REGISTRY

from tripindo.config import settings
from tripindo.errors import ErrorCode, TripIndoError

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
import tripindo.models  # noqa: F401  registers every table on Base.metadata
from tripindo.models.user import User
from tripindo.routers import auth, trips, destinations, expenses, participants, invitations, users, email, health
from tripindo.services.auth_events import AuthEvent, AuthEventBus
from tripindo.services.participant_sync import sync_user_participants
from tripindo.utils.database import init_db, close_db

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def reconcile_participants(db: AsyncSession, user: User) -> None:
    """SIGNED_IN handler: bind the user's email placeholders to their account"""
    # A failed row rolls the session back and expires `user`
    email, user_id = user.email, user.id
    await sync_user_participants(db, email, user_id)


def create_auth_events() -> AuthEventBus:
    events = AuthEventBus()
    events.subscribe(AuthEvent.SIGNED_IN, reconcile_participants)
    return events


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager - handles startup and shutdown events
    """
    # Startup
    logger.info("Starting Trip Indo API...")

    await init_db()

    logger.info("Trip Indo API ready to serve requests!")

    yield

    # Shutdown
    logger.info("Shutting down Trip Indo API...")

    await close_db()

    logger.info("Cleanup completed")


# Create FastAPI application
app = FastAPI(
    title="Trip Indo API",
    description="""
    ## Collaborative Trip Planning API

    Trip Indo lets a group plan a trip together.

    ### Features
    - Trips with a budget, destinations and activities
    - Budget statistics and the costliest items
    - Shared expenses split between participants
    - Invitations by email, and participants added before they have an account

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

app.state.auth_events = create_auth_events()

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
        # Label by route template so ids in the path do not create new series
        route = request.scope.get("route")
        endpoint = getattr(route, "path", None) or request.url.path
        method = request.method
        status = response.status_code

        REQUEST_COUNT.labels(method=method, endpoint=endpoint, status=status).inc()
        REQUEST_LATENCY.labels(method=method, endpoint=endpoint).observe(process_time)

    response.headers["X-Process-Time"] = str(process_time)
    return response


@app.exception_handler(TripIndoError)
async def trip_indo_error_handler(request: Request, exc: TripIndoError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return ORJSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message, "code": exc.code.value},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    # Driver message is passed through unmodified
    message = str(getattr(exc, "orig", None) or exc)
    logger.error(f"{request.method} {request.url.path} database error: {message}")
    return ORJSONResponse(
        status_code=500,
        content={"error": message, "code": ErrorCode.BACKEND_ERROR.value},
    )


# Include routers
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(trips.router, prefix="/trips", tags=["Trips"])
app.include_router(destinations.router, tags=["Destinations & Activities"])
app.include_router(expenses.router, tags=["Expenses"])
app.include_router(participants.router, tags=["Participants"])
app.include_router(invitations.router, tags=["Invitations"])
app.include_router(email.router, prefix="/api", tags=["Email"])


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint - API information"""
    return {
        "name": "Trip Indo API",
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
