"""FastAPI application — entry point for the ContentFlow dashboard."""

import logging
import random
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, settings
from dashboard import dashboard_router
from generators.insight import InsightGenerator
from metrics.simulator import MetricsSimulator
from providers.factory import build_llm_provider
from providers.llm.base import LLMProvider
from routes import APP_VERSION, router, set_dashboard
from state import DashboardState

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def create_app(app_settings: Settings | None = None, provider: LLMProvider | None = None) -> FastAPI:
    """Build the app. Tests pass their own settings and a stub provider."""
    cfg = app_settings or settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Mount: fresh card state and a running simulator. Unmount: cancel it."""
        logger.info("=" * 70)
        logger.info("ContentFlow AI Marketing Suite - Starting Up")
        logger.info("=" * 70)

        state = DashboardState()
        simulator = MetricsSimulator(
            state.metrics,
            rng=random.Random(cfg.metrics_seed),
            min_delay=cfg.metrics_min_delay,
            max_delay=cfg.metrics_max_delay,
        )
        generator = InsightGenerator(
            provider or build_llm_provider(cfg),
            max_tokens=cfg.insight_max_tokens,
            temperature=cfg.insight_temperature,
        )
        set_dashboard(state, simulator, generator)
        app.state.dashboard = state
        app.state.simulator = simulator

        logger.info("Starting metrics simulator...")
        simulator.start()

        logger.info("ContentFlow is running on http://localhost:%d", cfg.port)
        yield

        logger.info("Stopping metrics simulator...")
        await simulator.stop()
        logger.info("Shutdown complete")

    app = FastAPI(
        title="ContentFlow",
        description="AI marketing dashboard with live pipeline metrics and Gemini insights",
        version=APP_VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(dashboard_router)
    app.include_router(router)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=settings.port, reload=True)
