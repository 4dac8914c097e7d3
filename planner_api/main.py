from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from planner_api.db_init import init_db
from planner_api.routes import calendar, items, tasks
from planner_api.settings import get_settings
from timegrid.errors import InvalidInput


def create_app() -> FastAPI:
    logging.basicConfig(
        level=os.getenv("BACKEND_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )
    app = FastAPI(title="Planner API", version="0.1.0")

    app.include_router(items.router)
    app.include_router(calendar.router)
    app.include_router(tasks.router)

    @app.on_event("startup")
    async def _startup():
        logging.getLogger("planner_api").debug("Settings: %s", get_settings().redacted())
        await init_db()

    @app.exception_handler(InvalidInput)
    async def _invalid_input_handler(request: Request, exc: InvalidInput):
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logging.getLogger("planner_api").exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"detail": "Internal error"})

    @app.get("/health")
    async def health():
        return {"ok": True}

    return app


app = create_app()
