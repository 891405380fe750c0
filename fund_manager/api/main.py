"""FastAPI application factory"""

import uvicorn
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from fund_manager.api.middleware import RequestIDMiddleware, MetricsMiddleware
from fund_manager.api.v1 import groups, ledger, transactions
from fund_manager.infrastructure.database.models import Base
from fund_manager.infrastructure.database.session import engine
from fund_manager.infrastructure.observability.logging import setup_logging
from fund_manager.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Fund Manager",
        description="Personal finance tracker with shared group expenses and settlements",
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
    app.include_router(transactions.router, prefix="/v1", tags=["transactions"])
    app.include_router(groups.router, prefix="/v1", tags=["groups"])
    app.include_router(ledger.router, prefix="/v1", tags=["ledger"])

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn"""
    Base.metadata.create_all(bind=engine)
    uvicorn.run("fund_manager.api.main:app", host=settings.host, port=settings.port)
