"""
Behavioral Risk Engine - Main FastAPI Application
HTTP entry point wrapping the risk assessor
"""

from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

import numpy as np
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from riskengine import __version__
from riskengine.core.config import Settings, settings
from riskengine.services.activity_store import InMemoryActivityStore
from riskengine.services.risk_assessor import RiskAssessor
from riskengine.utils.logger import configure_application_logging
from riskengine.workers.activity_refresher import ActivityRefreshWorker
from riskengine.api.endpoints import risk

logger = configure_application_logging()

def build_default_components(config: Settings):
    store = InMemoryActivityStore()
    store.seed_demo(config.demo_entity_count, np.random.default_rng(config.random_seed))
    assessor = RiskAssessor.from_settings(store, config)
    refresher = None
    if config.refresh_enabled:
        refresher = ActivityRefreshWorker(
            store,
            interval_seconds=config.refresh_interval_seconds,
            seed=config.random_seed
        )
    return assessor, refresher

def create_app(
    assessor: Optional[RiskAssessor] = None,
    refresher: Optional[ActivityRefreshWorker] = None,
    config: Optional[Settings] = None
) -> FastAPI:
    config = config or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {config.app_name}...")

        if app.state.assessor is None:
            app.state.assessor, app.state.refresher = build_default_components(config)
            logger.info(f"Risk assessor ready with {len(app.state.assessor.store)} entities")

        if app.state.refresher is not None:
            app.state.refresher.start()

        yield

        logger.info(f"Shutting down {config.app_name}...")
        if app.state.refresher is not None:
            app.state.refresher.stop()

    app = FastAPI(
        title=config.app_name,
        description="Behavioral risk scoring for monitored accounts",
        version=__version__,
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json"
    )
    app.state.assessor = assessor
    app.state.refresher = refresher

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(
        risk.router,
        prefix=f"{config.api_v1_str}/risk",
        tags=["Risk Assessment"]
    )

    @app.get("/health")
    async def health_check():
        refresher_status = app.state.refresher.get_worker_status() if app.state.refresher else None
        return {
            "status": "healthy" if app.state.assessor is not None else "starting",
            "timestamp": datetime.utcnow().isoformat(),
            "version": __version__,
            "components": {
                "assessor": "ready" if app.state.assessor is not None else "not_initialized",
                "activity_refresher": refresher_status
            }
        }

    return app

app = create_app()

if __name__ == "__main__":
    uvicorn.run(
        "riskengine.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="info"
    )
