from dataclasses import asdict
from typing import Optional

from fastapi import FastAPI, Request

from ..common.config import SETTINGS, Settings
from ..common.logging import get_logger
from ..hublog.registry import LoggerRegistry
from .schemas import HealthResp, LogStatus
from .tracing import trace_requests

log = get_logger("api")

def create_app(settings: Settings = SETTINGS, registry: Optional[LoggerRegistry] = None) -> FastAPI:
    app = FastAPI(title="DMRHub API", version="0.1.0")
    app.middleware("http")(trace_requests)

    @app.on_event("startup")
    async def _open_logs():
        # one registry per process; loggers open lazily on first write
        app.state.logs = registry if registry is not None else LoggerRegistry(settings)
        log.info("Log registry ready")

    @app.on_event("shutdown")
    async def _close_logs():
        # runs after the server has stopped handling requests
        logs = getattr(app.state, "logs", None)
        if logs is not None:
            logs.close_all()

    @app.get("/healthz", response_model=HealthResp)
    def healthz(request: Request):
        logs = request.app.state.logs
        return HealthResp(ok=True, logs=[LogStatus(**asdict(s)) for s in logs.stats()])

    return app

app = create_app()
