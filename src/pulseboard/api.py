"""HTTP adapter for the dashboard: series, CSV download and event ingestion."""

import logging
from contextlib import asynccontextmanager
from typing import Annotated, Any

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query, Request, Response

from pulseboard import __version__
from pulseboard.config import Settings, get_settings
from pulseboard.criteria import parse_criteria
from pulseboard.dashboard import DashboardView
from pulseboard.errors import InvalidCriteriaError, InvalidEventError
from pulseboard.models import Event, FilterCriteria, PageWindow
from pulseboard.pipeline import CSV_MEDIA_TYPE, filter_events, run_pipeline, to_csv_bytes
from pulseboard.producer import SyntheticProducer
from pulseboard.sample_data import seed_store
from pulseboard.store import EventStore

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> EventStore:
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_criteria(
    start: Annotated[str | None, Query(description="Inclusive lower time bound (ISO-8601)")] = None,
    end: Annotated[str | None, Query(description="Inclusive upper time bound (ISO-8601)")] = None,
    endpoints: Annotated[list[str] | None, Query(description="Endpoints to include; empty means all")] = None,
    min_count: Annotated[str, Query(description="Inclusive minimum request count")] = "0",
) -> FilterCriteria:
    try:
        return parse_criteria(
            start=start, end=end, endpoints=endpoints, min_count=min_count
        )
    except InvalidCriteriaError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("/healthz")
async def healthz() -> dict[str, bool]:
    return {"ok": True}


@router.post("/events", response_model=Event, status_code=201)
async def ingest_event(
    payload: dict[str, Any],
    store: Annotated[EventStore, Depends(get_store)],
) -> Event:
    """Append one event from an external producer."""
    try:
        return store.append(payload)
    except InvalidEventError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e


@router.get("/series", response_model=DashboardView)
async def get_series(
    criteria: Annotated[FilterCriteria, Depends(get_criteria)],
    store: Annotated[EventStore, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    page: Annotated[int, Query(description="1-based page number")] = 1,
    page_size: Annotated[int | None, Query(ge=1, le=1000)] = None,
) -> DashboardView:
    """Chart-ready series for the requested page of filtered events."""
    events = store.snapshot()
    window = PageWindow(
        page_number=max(1, page), page_size=page_size or settings.page_size
    )
    result = run_pipeline(
        events,
        criteria,
        window,
        settings.color_scheme,
        sort_points=settings.sort_series_points,
        overflow=settings.page_overflow,
    )
    return DashboardView.from_result(result, total_events=len(events))


@router.get("/export")
async def export_csv(
    criteria: Annotated[FilterCriteria, Depends(get_criteria)],
    store: Annotated[EventStore, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Response:
    """Download the whole filtered set as CSV, ignoring pagination."""
    filtered = filter_events(store.snapshot(), criteria)
    return Response(
        content=to_csv_bytes(filtered),
        media_type=CSV_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{settings.export_filename}"'
        },
    )


def create_app(
    settings: Settings | None = None, store: EventStore | None = None
) -> FastAPI:
    """Build the API app around a store. The producer runs for the app lifespan."""
    settings = settings or get_settings()
    store = store if store is not None else EventStore()

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        logger.info("Starting Pulseboard API...")
        if settings.seed_sample_data:
            seeded = seed_store(store)
            logger.info("Seeded %s sample events", seeded)

        producer = None
        if settings.producer_enabled:
            producer = SyntheticProducer.from_settings(store, settings)
            await producer.start()
        else:
            logger.info("Synthetic producer disabled (PULSEBOARD_PRODUCER_ENABLED=false)")

        try:
            yield
        finally:
            if producer is not None:
                await producer.stop()
            logger.info("Pulseboard API stopped")

    app = FastAPI(title="Pulseboard", version=__version__, lifespan=lifespan)
    app.state.store = store
    app.state.settings = settings
    app.include_router(router)
    return app
