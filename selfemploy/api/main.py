from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.middleware.cors import CORSMiddleware

from selfemploy.api.routes_health import router as health_router
from selfemploy.api.routes_ledger import router as ledger_router
from selfemploy.api.routes_metrics import router as metrics_router
from selfemploy.api.routes_notifications import router as notifications_router
from selfemploy.api.routes_submissions import router as submissions_router
from selfemploy.api.routes_tax_years import router as tax_years_router
from selfemploy.core.config import settings
from selfemploy.core.errors import register_error_handlers
from selfemploy.core.logger import init_logging


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):  # type: ignore[override]
        response = await call_next(request)
        response.headers.setdefault("Referrer-Policy", "same-origin")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        return response


def create_app() -> FastAPI:
    init_logging()

    is_production = settings.ENV.lower() == "prod"
    app = FastAPI(
        title=settings.APP_NAME,
        debug=False,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
        allow_methods=settings.CORS_ALLOW_METHODS,
        allow_headers=settings.CORS_ALLOW_HEADERS,
    )
    app.add_middleware(SecurityHeadersMiddleware)
    register_error_handlers(app)
    app.include_router(tax_years_router, tags=["tax-years"])
    app.include_router(ledger_router, tags=["ledger"])
    app.include_router(submissions_router, tags=["submissions"])
    app.include_router(notifications_router, tags=["notifications"])
    app.include_router(metrics_router, tags=["metrics"])
    app.include_router(health_router)
    return app


app = create_app()
