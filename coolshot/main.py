"""
coolshot/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Builds the store, AI resolver, transport and dispatcher
- Registers API routes (webhook) and health endpoints
- No business logic should be written here
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import httpx
import time

from coolshot.core.config import settings, validate_settings
from coolshot.core.errors import add_exception_handlers
from coolshot.core.logging import setup_logging, get_logger
from coolshot.flow.dispatcher import Dispatcher
from coolshot.schemas.response import HealthResponse
from coolshot.services.ai_service import AIService
from coolshot.services.session_service import SessionService
from coolshot.services.twilio_service import TwilioService
from coolshot.services.user_service import UserStore
from coolshot.api import webhook

# Initialize logging first
setup_logging()
logger = get_logger(__name__)

STARTED_AT = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    logger.info(f"🚀 Starting {settings.BOT_NAME}...")

    try:
        logger.info("Validating configuration...")
        validate_settings()
        logger.info("✅ Configuration validated")

        store = UserStore(
            users_file=settings.USERS_FILE,
            analytics_file=settings.ANALYTICS_FILE,
            primary_admin_id=settings.PRIMARY_ADMIN_ID,
        )
        store.initialize()

        client = httpx.AsyncClient(follow_redirects=True)
        transport = TwilioService.from_settings(settings, client=client)
        if not transport.is_configured():
            logger.warning("⚠️ Twilio is not configured; outbound messages will be dropped")

        dispatcher = Dispatcher(
            store=store,
            ai_service=AIService.from_settings(settings, client=client),
            sessions=SessionService(settings.DEFAULT_ROLE, settings.DEFAULT_LANGUAGE),
            transport=transport,
            settings=settings,
        )

        app.state.http_client = client
        app.state.store = store
        app.state.dispatcher = dispatcher

        await dispatcher.notify_startup()

        logger.info(f"🎉 {settings.BOT_NAME} started successfully!")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"Debug Mode: {settings.DEBUG}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield  # Application runs here

    logger.info(f"🛑 Shutting down {settings.BOT_NAME}...")
    await client.aclose()
    logger.info("👋 Shut down successfully")


app = FastAPI(
    title=f"{settings.BOT_NAME} - WhatsApp Assistant",
    description="WhatsApp AI chat-bot with command routing and usage analytics",
    version=settings.BOT_VERSION,
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,  # Disable docs in production
    redoc_url="/redoc" if settings.is_development else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time header to all responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    # AI resolution across every provider can be slow
    if process_time > 30.0:
        logger.warning(f"Slow request detected: {request.method} {request.url.path} ({process_time:.1f}s)")

    return response


add_exception_handlers(app)

app.include_router(webhook.router, prefix=settings.API_PREFIX, tags=["Webhook"])


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - basic info."""
    return {
        "name": settings.BOT_NAME,
        "version": settings.BOT_VERSION,
        "company": settings.COMPANY_NAME,
        "status": "running",
        "environment": settings.ENVIRONMENT,
    }


@app.get("/health", tags=["Health"], response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        status="healthy",
        bot=settings.BOT_NAME,
        version=settings.BOT_VERSION,
        uptime=time.time() - STARTED_AT,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@app.get("/ping", tags=["Health"], response_class=PlainTextResponse)
async def ping():
    return f"{settings.BOT_NAME} is alive! 🚀"


# Liveness probe (for Kubernetes/orchestration)
@app.get("/live", tags=["Health"])
async def liveness_check():
    return {"status": "alive"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "coolshot.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower(),
    )
