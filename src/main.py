import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from src.config.cors_config import CORSConfigurationError
from src.config.logging_config import configure_logging
from src.config.settings import settings
from src.database import client as db_client
from src.features.admin.router import router as admin_router
from src.features.admin.service import AdminService
from src.features.auth.router import router as auth_router
from src.features.donor.router import router as donor_router
from src.features.messages.router import router as messages_router
from src.features.requests.router import router as requests_router
from src.shared.rate_limit import limiter, rate_limit_handler
from src.shared.validators.fields import get_input_validator

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


async def seed_default_admin() -> None:
    """Create the configured admin account on first start."""
    async with db_client.get_session() as session:
        await AdminService.ensure_default_admin(session, settings.admin_username, settings.admin_password)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Handle startup and shutdown events."""
    # Startup
    get_input_validator()
    await db_client.init_db()
    await seed_default_admin()
    if settings.admin_password == "admin123":
        logger.warning("Default admin password is in use, set ADMIN_PASSWORD")
    yield
    # Shutdown
    await db_client.close_db()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
    debug=settings.debug,
)

# Add rate limiting middleware
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_handler)
app.add_middleware(SlowAPIMiddleware)

# Configure CORS middleware with environment-aware settings
try:
    cors_config = settings.get_cors_configuration()
    cors_config.log_configuration()
    app.add_middleware(CORSMiddleware, **cors_config.get_middleware_config())
except CORSConfigurationError as exc:
    logger.error(f"CORS configuration error: {exc}")
    raise

# Router Registration
routers: list[APIRouter] = [
    auth_router,
    donor_router,
    requests_router,
    messages_router,
    admin_router,
]

for router in routers:
    app.include_router(router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    return {"message": "Blood Donor Matching API", "status": "running"}


@app.get("/health")
async def health():
    return {"status": "healthy"}
