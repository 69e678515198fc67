import logging
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.middleware.sessions import SessionMiddleware

from vtboard.config import settings
from vtboard.core.dependencies import board_url
from vtboard.core.errors import BoardError, ConfigurationMissing
from vtboard.core.rate_limit import limiter
from vtboard.core.session import flash
from vtboard.modules.auth import routes as auth_routes
from vtboard.modules.board import routes as board_routes
from vtboard.modules.comments import routes as comments_routes
from vtboard.modules.likes import routes as likes_routes
from vtboard.modules.posts import routes as posts_routes
from vtboard.modules.vtubers import routes as vtubers_routes
from vtboard.rendering import render_config_error

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(ConfigurationMissing)
async def configuration_missing_handler(request: Request, exc: ConfigurationMissing):
    logger.error(str(exc))
    return HTMLResponse(render_config_error(exc.missing), status_code=503)


@app.exception_handler(BoardError)
async def board_error_handler(request: Request, exc: BoardError):
    """Show the error on the reloaded board, keeping the selected streamer"""
    flash(request.session, exc.message)
    return RedirectResponse(board_url(request.query_params.get("vtuber")), status_code=303)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"Referrer-Policy", b"same-origin"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SlowAPIMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    session_cookie=settings.session_cookie_name,
    max_age=settings.session_max_age,
    same_site="lax",
    https_only=settings.session_cookie_secure,
)

# Include module routes
app.include_router(board_routes.router)
app.include_router(auth_routes.router)
app.include_router(vtubers_routes.router)
app.include_router(posts_routes.router)
app.include_router(likes_routes.router)
app.include_router(comments_routes.router)


@app.on_event("startup")
async def startup_event():
    logger.info("Application startup")
    missing = settings.missing_required()
    if missing:
        logger.error(f"Supabase settings missing: {', '.join(missing)}; the board will answer 503 until they are set")
    if settings.is_production and settings.session_secret == "change-me":
        logger.warning("SESSION_SECRET is the default value; set a real secret in production")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Application shutdown")


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe: reports whether the Supabase settings are present."""
    missing = settings.missing_required()
    if missing:
        return JSONResponse(status_code=503, content={"status": "not ready", "missing": missing})
    return {"status": "ready"}
