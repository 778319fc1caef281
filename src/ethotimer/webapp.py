"""FastAPI application that exposes the activity timers over HTTP."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, Response
from pydantic import BaseModel

from .clock import Clock
from .config import TimerSettings
from .coordinator import TimerSet
from .export import render
from .models import HistoryRow, TimerSnapshot
from .view import ViewState

logger = logging.getLogger(__name__)


class SlotPayload(BaseModel):
    slot_id: int
    label: str
    elapsed_seconds: float
    is_active: bool


class TimersPayload(BaseModel):
    slots: list[SlotPayload]
    master_label: str
    master_elapsed_seconds: float
    any_active: bool
    viewing_data: bool


class IntentResult(BaseModel):
    changed: bool
    timers: TimersPayload


class HistoryRowPayload(BaseModel):
    duration_from_start_seconds: float
    activity_id: int
    is_active: int


class DataView(BaseModel):
    csv: str
    rows: list[HistoryRowPayload]


def create_app(
    *,
    settings: Optional[TimerSettings] = None,
    clock: Optional[Clock] = None,
) -> FastAPI:
    """Instantiate the FastAPI application around a fresh timer set."""
    timers = TimerSet(settings or TimerSettings(), clock=clock)
    view = ViewState(timers)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
        logger.info("Serving %d activity slots.", len(timers.slot_ids))
        yield
        timers.stop_all()

    app = FastAPI(title="ethotimer", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.timers = timers
    app.state.view = view

    @app.get("/api/timers")
    def list_timers() -> TimersPayload:
        return _timers_payload(timers.snapshot(), view)

    @app.post("/api/timers/{slot_id}/start")
    def start_timer(slot_id: int) -> IntentResult:
        try:
            changed = timers.activate(slot_id)
        except ValueError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        view.view_timers()
        return IntentResult(changed=changed, timers=_timers_payload(timers.snapshot(), view))

    @app.post("/api/stop")
    def stop_all() -> IntentResult:
        changed = timers.stop_all()
        return IntentResult(changed=changed, timers=_timers_payload(timers.snapshot(), view))

    @app.post("/api/clear")
    def clear() -> TimersPayload:
        timers.reset()
        return _timers_payload(timers.snapshot(), view)

    @app.post("/api/view/data")
    def view_data() -> DataView:
        rows = view.view_data()
        return DataView(csv=render(rows), rows=_history_payload(rows))

    @app.post("/api/view/timers")
    def view_timers() -> TimersPayload:
        view.view_timers()
        return _timers_payload(timers.snapshot(), view)

    @app.get("/api/history")
    def history() -> list[HistoryRowPayload]:
        return _history_payload(timers.history_rows())

    @app.get("/api/history.csv", response_class=PlainTextResponse)
    def history_csv() -> str:
        return timers.history_csv()

    @app.get("/api/export")
    def export() -> Response:
        artifact = timers.export_csv()
        logger.info("Serving export %s", artifact.filename)
        return Response(
            content=artifact.payload,
            media_type=artifact.media_type,
            headers={"Content-Disposition": f'attachment; filename="{artifact.filename}"'},
        )

    return app


def _timers_payload(snapshot: TimerSnapshot, view: ViewState) -> TimersPayload:
    return TimersPayload(
        slots=[
            SlotPayload(
                slot_id=slot.slot_id,
                label=slot.label,
                elapsed_seconds=slot.elapsed_seconds,
                is_active=slot.is_active,
            )
            for slot in snapshot.slots
        ],
        master_label=snapshot.master_label,
        master_elapsed_seconds=snapshot.master_elapsed.total_seconds(),
        any_active=snapshot.active_slot is not None,
        viewing_data=view.viewing_data,
    )


def _history_payload(rows: list[HistoryRow]) -> list[HistoryRowPayload]:
    return [HistoryRowPayload(**row._asdict()) for row in rows]
