from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.responses import JSONResponse

from ....core.config import get_settings
from ....db import check_database_health
from ...deps import get_db_session

router = APIRouter(tags=["ops"])


@router.get("/health")
def health(session: Session = Depends(get_db_session)) -> JSONResponse:
    # Touch the session so the ORM path is checked as well as the raw engine
    try:
        session.execute(text("SELECT 1"))
        orm_ok = True
    except Exception as exc:  # noqa: BLE001
        orm_ok = False
        orm_details = str(exc)
    else:
        orm_details = "ok"

    db = check_database_health()
    overall_ok = db["ok"] and orm_ok
    return JSONResponse(
        {
            "status": "ok" if overall_ok else "degraded",
            "version": get_settings().app_version,
            "db": db,
            "orm": {"ok": orm_ok, "details": orm_details},
        },
        status_code=200 if overall_ok else 503,
    )
