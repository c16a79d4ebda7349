import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from pastebox.api.error_handlers import register_error_handlers
from pastebox.api.http import (
    auth_router, documents_router, favorites_router, health_router, site_router
)
from pastebox.core.auth import get_session_codec
from pastebox.core.config import get_settings
from pastebox.core.db import SessionLocal, init_models
from pastebox.core.observability import setup_logging
from pastebox.domains.documents.expiry import ExpirySweeper

logger = logging.getLogger(__name__)

CONTENT_SECURITY_POLICY = "; ".join([
    "default-src 'self'",
    "base-uri 'self'",
    "connect-src 'self'",
    "img-src 'self' data:",
    "font-src 'self' https://fonts.gstatic.com",
    "style-src 'self' 'unsafe-inline' https://fonts.googleapis.com",
    "script-src 'self'",
    "object-src 'none'",
    "frame-ancestors 'none'",
])


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Запуск и остановка приложения"""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    await init_models()
    # Секрет подписи определяется сразу, а не на первом запросе
    get_session_codec()

    sweeper = ExpirySweeper(SessionLocal, settings.cleanup_interval_minutes * 60)
    sweeper.start()
    logger.info("Pastebox API started")
    yield
    await sweeper.stop()
    logger.info("Pastebox API shutting down")


app = FastAPI(
    title="Pastebox",
    description="Одноразовые документы с паролем и сроком жизни",
    version="1.0.0",
    lifespan=lifespan
)

settings = get_settings()

# В продакшене клиент отдается с того же origin
if not settings.is_production:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.middleware("http")
async def security_headers(request: Request, call_next):
    """Заголовки безопасности для всех ответов"""
    response = await call_next(request)
    response.headers["Content-Security-Policy"] = CONTENT_SECURITY_POLICY
    response.headers["Referrer-Policy"] = "no-referrer"
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Cross-Origin-Resource-Policy"] = "same-origin"
    if settings.hsts_enabled:
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    if request.url.path.startswith("/d/"):
        response.headers["X-Robots-Tag"] = "noindex"
    return response


register_error_handlers(app)

app.include_router(health_router)
app.include_router(site_router)
app.include_router(auth_router)
app.include_router(documents_router)
app.include_router(favorites_router)
