from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address

from apps.roster.router import router as roster_router
from models.base import Base, engine
from settings.config import get_settings
from utils.logging import setup_logging

# Imported for their side effect of registering tables on Base.metadata
from models import goal, personality, plan, team, user  # noqa: F401


def create_app() -> FastAPI:
    """
    Application factory to build a FastAPI app with all middlewares and routers.
    """
    settings = get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version="1.0.0",
    )

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type"],
        expose_headers=["X-Roster-Outcome"],
    )

    # Security headers middleware (helmet-like)
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Strict-Transport-Security"] = "max-age=63072000; includeSubDomains; preload"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "no-referrer"
        response.headers["Cache-Control"] = "no-store"
        return response

    # Optional SlowAPI rate limiter
    if settings.ENABLE_RATE_LIMITER:
        # Build a default limit string from settings, using common time units
        req = settings.RATE_LIMIT_REQUESTS
        win = settings.RATE_LIMIT_WINDOW_SECONDS
        if win == 1:
            default_limit = f"{req}/second"
        elif win == 60:
            default_limit = f"{req}/minute"
        elif win == 3600:
            default_limit = f"{req}/hour"
        elif win == 86400:
            default_limit = f"{req}/day"
        else:
            # Fallback: human-friendly seconds window
            default_limit = f"{req} per {win} seconds"

        limiter = Limiter(
            key_func=get_remote_address,
            default_limits=[default_limit],
            storage_uri=settings.RATE_LIMIT_STORAGE_URI or None,
        )
        app.state.limiter = limiter
        app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
        app.add_middleware(SlowAPIMiddleware)

    # Routers
    app.include_router(roster_router)

    # The roster only reads these tables; creating them is a local/dev convenience.
    # In prod the owning systems manage the schema (see migrations/).
    @app.on_event("startup")
    async def on_startup():
        if settings.ENVIRONMENT == "development":
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()
