"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from budget_planner.api.middleware import RequestIDMiddleware, MetricsMiddleware
from budget_planner.api.v1 import analysis, budget_rules, goals, scenarios
from budget_planner.infrastructure.database.session import init_db
from budget_planner.infrastructure.observability.logging import setup_logging
from budget_planner.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Budget Planner",
        description="Financial health, budget, goal and scenario analysis service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
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
    app.include_router(goals.router, prefix="/v1", tags=["goals"])
    app.include_router(budget_rules.router, prefix="/v1", tags=["budget-rules"])
    app.include_router(scenarios.router, prefix="/v1", tags=["scenarios"])

    return app


app = create_app()
