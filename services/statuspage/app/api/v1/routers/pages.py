"""Public, server-rendered status page views."""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from ....core.config import get_settings
from ....core.logging import get_logger
from ....core.translation import get_translator
from ....models.incidents import Incident, IncidentUpdate
from ...deps import PresenterFactory, get_db_session, get_request_locale, get_update_presenter

TEMPLATES_DIR = Path(__file__).resolve().parents[3] / "templates"

router = APIRouter(tags=["pages"])
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
logger = get_logger(__name__)


@router.get("/incidents/{incident_id}", response_class=HTMLResponse, name="incident")
def incident_page(
    request: Request,
    incident_id: int,
    session: Session = Depends(get_db_session),
    locale: str = Depends(get_request_locale),
    present: PresenterFactory = Depends(get_update_presenter),
):
    """Render an incident and its update timeline."""
    inc = session.get(Incident, incident_id)
    if inc is None or inc.is_deleted or not inc.visible:
        raise HTTPException(status_code=404, detail="Incident not found")

    updates = (
        session.query(IncidentUpdate)
        .filter(IncidentUpdate.incident_id == incident_id)
        .order_by(IncidentUpdate.created_at.desc(), IncidentUpdate.id.desc())
        .all()
    )
    logger.info("page.incident", incident_id=incident_id, updates=len(updates), locale=locale)
    return templates.TemplateResponse(
        request,
        "incident.html",
        {
            "app_name": get_settings().app_name,
            "incident": inc,
            "updates": [present(u) for u in updates],
            "locale": locale,
            "t": get_translator(locale),
        },
    )
