"""dashmet demo: FastAPI backend serving every dashboard as JSON.

Run with ``uvicorn app:app --reload`` from this directory. Without the
upstream services running, every dashboard answers with flagged fallback
data; set ``DASHMET_USE_MOCK_DATA=true`` to skip the network entirely.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException

from dashmet import __version__
from dashmet.config import get_settings
from dashmet.logging_setup import LoggerConfig, configure_logging
from dashmet.service import DashboardService, build_client

SETTINGS = get_settings()
configure_logging(LoggerConfig(level=SETTINGS.log_level))


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with build_client(SETTINGS) as client:
        app.state.service = DashboardService.from_settings(SETTINGS, client)
        yield


app = FastAPI(title="dashmet Demo", version=__version__, lifespan=lifespan)


def _service() -> DashboardService:
    return app.state.service


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "demo": "dashmet", "mock_forced": SETTINGS.use_mock_data}


@app.get("/api/dashboards")
def dashboards() -> dict:
    return {"dashboards": _service().dashboards}


@app.get("/api/dashboards/{name}")
async def dashboard(name: str, time_range: Optional[str] = None) -> dict:
    try:
        return await _service().fetch_dashboard(name, time_range)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown dashboard: {name}")


@app.get("/api/overview")
async def overview(time_range: Optional[str] = None) -> dict:
    return await _service().fetch_overview(time_range)
