from __future__ import annotations

from fastapi import APIRouter
from sqlalchemy import text

from selfemploy.api.dependencies import DbDep
from selfemploy.core.exceptions import ServiceUnavailableError

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz(db: DbDep) -> dict[str, str]:
    """Basic liveness probe (cheap)."""
    try:
        db.execute(text("SELECT 1"))
    except Exception as exc:  # noqa: BLE001
        raise ServiceUnavailableError("database", str(exc)) from exc
    return {"status": "ok"}
