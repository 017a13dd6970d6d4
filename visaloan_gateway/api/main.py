"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from visaloan_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from visaloan_gateway.api.v1 import eligibility, leads, quote
from visaloan_gateway.infrastructure.observability.logging import setup_logging
from visaloan_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Visa Loan Gateway",
        description="Loan eligibility calculator and lead capture service",
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
    app.include_router(quote.router, prefix="/v1", tags=["quotes"])
    app.include_router(eligibility.router, prefix="/v1", tags=["eligibility"])
    app.include_router(leads.router, prefix="/v1", tags=["leads"])

    return app


app = create_app()
