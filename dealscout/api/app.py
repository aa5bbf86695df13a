# dealscout/api/app.py
from __future__ import annotations

import asyncio
import logging
import threading

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from dealscout.core.logs import configure_logging
from dealscout.orchestrator import DealPipeline
from dealscout.schemas.models import AgentRequest, ErrorEnvelope

logger = logging.getLogger(__name__)

router = APIRouter()

# how often an in-flight request checks whether the client went away
_DISCONNECT_POLL_S = 0.5


@router.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/api/agent", tags=["agent"])
async def agent(request: Request) -> JSONResponse:
    try:
        body = AgentRequest.model_validate(await request.json())
    except (ValidationError, ValueError) as e:
        msg = "Request body must be JSON with a non-empty 'query' string."
        logger.info("bad request: %s", e)
        return JSONResponse(ErrorEnvelope(error=msg).model_dump(), status_code=400)

    pipeline: DealPipeline = request.app.state.pipeline
    cancel = threading.Event()
    task = asyncio.ensure_future(asyncio.to_thread(pipeline.handle, body.query, cancel=cancel))
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=_DISCONNECT_POLL_S)
            if done:
                break
            if await request.is_disconnected():
                logger.info("client disconnected; cancelling %r", body.query)
                cancel.set()
                break
        status, payload = await task
    finally:
        cancel.set()
    return JSONResponse(payload, status_code=status)


def create_app(pipeline: DealPipeline | None = None) -> FastAPI:
    configure_logging()
    app = FastAPI(title="dealscout - real estate deal finder")
    app.state.pipeline = pipeline or DealPipeline()
    app.include_router(router)
    return app


__all__ = ["create_app", "router"]
