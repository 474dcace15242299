"""
FastAPI Main - Entry point del backend de graficos de insights

Endpoints:
- GET /api/health - Health check
- GET /api/charts - Lista los graficos disponibles
- GET /api/charts/{chart_id} - Spec Vega-Lite del grafico
"""
import time
import uuid
from contextlib import asynccontextmanager
from datetime import date
from typing import List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response
from pydantic import BaseModel

# Cargar .env
load_dotenv()

from .charts.catalog import build_chart, list_charts
from .config import Settings, get_settings
from .db.summary_store import SummaryStore
from .errors import InvalidRangeError, SummaryDecodeError
from .utils.logger import ensure_configured, get_logger

logger = get_logger("api")

VERSION = "0.1.0"


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    version: str
    database: str
    summaries: Optional[int] = None


class ChartInfo(BaseModel):
    id: str
    title: str
    description: str
    source: str


class ChartsResponse(BaseModel):
    """Lista de graficos disponibles"""
    charts: List[ChartInfo]


def create_app(settings: Optional[Settings] = None, store: Optional[SummaryStore] = None) -> FastAPI:
    """
    Build the app. A store passed in is borrowed and left open on shutdown;
    otherwise one is opened on settings.db_path for the app lifetime.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        ensure_configured(settings.log_level, settings.log_format)
        owned = store is None
        app.state.store = store or SummaryStore(settings.db_path)
        logger.info("Insights backend started", {"db_path": app.state.store.path})
        yield
        if owned:
            app.state.store.close()
        app.state.store = None
        logger.info("Insights backend stopped")

    app = FastAPI(
        title="Insights Charts API",
        description="Vega-Lite charts built from usage summaries",
        version=VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    def _get_store(request: Request) -> SummaryStore:
        s = request.app.state.store
        if s is None:
            raise HTTPException(status_code=503, detail="Summary store not available")
        return s

    @app.get("/api/health", response_model=HealthResponse)
    def health_check(request: Request):
        """Health check endpoint with store status"""
        s = request.app.state.store
        if s is None or not s.test_connection():
            return HealthResponse(status="degraded", version=VERSION, database="disconnected")
        return HealthResponse(
            status="healthy",
            version=VERSION,
            database="connected",
            summaries=s.count(),
        )

    @app.get("/api/charts", response_model=ChartsResponse)
    def get_charts():
        """Lista los graficos del catalogo"""
        return ChartsResponse(charts=[ChartInfo(**c) for c in list_charts()])

    @app.get("/api/charts/{chart_id}")
    def get_chart(
        chart_id: str,
        request: Request,
        date_from: Optional[date] = Query(None, description="Inicio (graficos historicos)"),
        date_to: Optional[date] = Query(None, description="Fin inclusive (graficos historicos)"),
    ):
        """Spec Vega-Lite del grafico, como JSON"""
        trace_id = str(uuid.uuid4())[:8]
        start_time = time.time()
        s = _get_store(request)
        logger.start("Building chart", {"chart": chart_id}, trace_id=trace_id)

        try:
            spec = build_chart(
                chart_id,
                s,
                date_from=date_from,
                date_to=date_to,
                default_days=request.app.state.settings.default_range_days,
            )
        except KeyError:
            logger.warning("Unknown chart", {"chart": chart_id}, trace_id=trace_id)
            raise HTTPException(status_code=404, detail=f"Unknown chart: {chart_id}")
        except SummaryDecodeError as e:
            logger.error("Stored summary could not be decoded", {"chart": chart_id}, trace_id=trace_id)
            raise HTTPException(status_code=500, detail=str(e))
        except InvalidRangeError as e:
            raise HTTPException(status_code=400, detail=str(e))

        elapsed_ms = (time.time() - start_time) * 1000
        logger.end("Chart built", {"chart": chart_id, "ms": round(elapsed_ms, 2)}, trace_id=trace_id)
        return Response(content=spec, media_type="application/json")

    return app


app = create_app()
