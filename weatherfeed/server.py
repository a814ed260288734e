"""FastAPI app serving the latest dataset over HTTP and WebSocket."""

import asyncio
import json
import logging
from contextlib import asynccontextmanager, suppress
from pathlib import Path

from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse, HTMLResponse
from fastapi.staticfiles import StaticFiles

from weatherfeed.config.schema import FeedConfig
from weatherfeed.ingest.forecast_client import ForecastClient
from weatherfeed.models.common import utc_now_iso
from weatherfeed.models.weather import Dataset
from weatherfeed.pipeline.dataset_loader import DatasetLoader, build_loader
from weatherfeed.pipeline.dataset_store import DatasetStore
from weatherfeed.scheduler import DailyScheduler

logger = logging.getLogger(__name__)


class ConnectionManager:
    """Tracks open WebSocket clients and pushes dataset snapshots to them."""

    def __init__(self):
        self.active: set[WebSocket] = set()

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.active.add(websocket)
        logger.info("New client connected (%d open)", len(self.active))

    def disconnect(self, websocket: WebSocket) -> None:
        self.active.discard(websocket)
        logger.info("Client disconnected (%d open)", len(self.active))

    async def broadcast_dataset(self, dataset: Dataset) -> None:
        payload = json.dumps(dataset.to_dict())
        for websocket in list(self.active):
            try:
                await websocket.send_text(payload)
            except Exception as e:
                logger.warning("Dropping client after failed send: %s", e)
                self.disconnect(websocket)


async def refresh_logged(loader: DatasetLoader) -> None:
    """Run a refresh, logging instead of raising. Used by background triggers."""
    try:
        await loader.refresh()
    except Exception:
        logger.exception("Dataset refresh crashed")


def create_app(
    config: FeedConfig,
    store: DatasetStore | None = None,
    loader: DatasetLoader | None = None,
) -> FastAPI:
    """Build the app. A loader is wired from config unless one is given."""
    store = store if store is not None else DatasetStore()
    manager = ConnectionManager()
    client: ForecastClient | None = None
    if loader is None:
        client = ForecastClient(config.forecast.url, config.forecast.timeout_seconds)
        loader = build_loader(config, store, client)
    loader.on_complete = manager.broadcast_dataset
    static_dir = Path(config.server.static_dir)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        tasks: list[asyncio.Task] = []
        scheduler = DailyScheduler(
            lambda: loader.refresh(),
            hour=config.schedule.hour,
            minute=config.schedule.minute,
        )
        if config.schedule.refresh_on_startup:
            tasks.append(asyncio.create_task(refresh_logged(loader)))
        if config.schedule.enabled:
            tasks.append(asyncio.create_task(scheduler.run_forever()))
        try:
            yield
        finally:
            scheduler.stop()
            for task in tasks:
                task.cancel()
            for task in tasks:
                with suppress(asyncio.CancelledError):
                    await task
            if client is not None:
                await client.aclose()

    app = FastAPI(title="Weather Feed", version="0.1.0", lifespan=lifespan)
    app.state.store = store
    app.state.loader = loader
    app.state.connections = manager

    @app.get("/")
    def serve_index():
        index = static_dir / "index.html"
        if index.exists():
            return FileResponse(index, media_type="text/html")
        return HTMLResponse("<h1>index.html not found</h1>", status_code=404)

    @app.get("/weather")
    def get_weather():
        """Latest dataset, whatever state the current refresh is in."""
        return store.get().to_dict()

    @app.get("/health")
    def get_health():
        summary = loader.last_summary
        return {
            "loading": loader.is_running,
            "last_refresh": summary.to_dict() if summary is not None else None,
            "timestamp": utc_now_iso(),
        }

    @app.post("/refresh")
    async def trigger_refresh():
        """Run a refresh now and report its summary."""
        if loader.is_running:
            raise HTTPException(409, "Refresh already in progress")
        try:
            summary = await loader.refresh()
        except Exception as e:
            logger.exception("Manual refresh crashed")
            raise HTTPException(500, f"Refresh failed: {e}") from e
        if summary is None:
            raise HTTPException(409, "Refresh already in progress")
        return summary.to_dict()

    @app.websocket("/")
    async def weather_socket(websocket: WebSocket):
        await manager.connect(websocket)
        try:
            await websocket.send_text(json.dumps(store.get().to_dict()))
            while True:
                message = await websocket.receive_text()
                logger.info("Received message => %s", message)
        except WebSocketDisconnect:
            pass
        finally:
            manager.disconnect(websocket)

    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir), name="static")

    return app
