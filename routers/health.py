import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse

from core.database import check_db_connection

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/", response_class=PlainTextResponse)
async def root():
    return "Hello from the WebXR study backend!"


# Used by docker compose to gate the reverse proxy on the backend being up
@router.get("/health")
async def health():
    return {"status": "ok"}


@router.get("/db/health")
async def db_health():
    result = await check_db_connection()
    if result["ok"]:
        return {"status": "ok"}
    logger.error(f"DB health failed: {result['error']}")
    return JSONResponse(status_code=500, content={"status": "error", "message": result["error"]})


@router.get("/health/full")
async def full_health():
    db = await check_db_connection()
    if db["ok"]:
        return {"status": "ok", "db": db}
    return JSONResponse(status_code=503, content={"status": "degraded", "db": db})
