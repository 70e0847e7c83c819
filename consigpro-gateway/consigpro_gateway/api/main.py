"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from consigpro_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from consigpro_gateway.api.v1 import analysis, ledger, margin
from consigpro_gateway.infrastructure.observability.logging import setup_logging
from consigpro_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="ConsigPro 360 Gateway",
        description="SIAPE payroll document analysis and consignment margin service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(analysis.router, prefix="/v1", tags=["analysis"])
    app.include_router(ledger.router, prefix="/v1", tags=["ledger"])
    app.include_router(margin.router, prefix="/v1", tags=["margin"])

    return app


app = create_app()
