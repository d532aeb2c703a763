from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from ....core.dates import to_app_timezone
from ....core.logging import get_logger
from ....core.observability import record_incident
from ....models.incidents import Incident
from ....schemas.incidents import (
    DeletedResponse,
    IncidentCreateRequest,
    IncidentResponse,
)
from ...deps import get_db_session

router = APIRouter(prefix="/v1/incidents", tags=["incidents"])
logger = get_logger(__name__)


def get_incident_or_404(session: Session, incident_id: int) -> Incident:
    inc = session.get(Incident, incident_id)
    if inc is None or inc.is_deleted:
        logger.warning("incident.not_found", incident_id=incident_id)
        raise HTTPException(status_code=404, detail="Incident not found")
    return inc


@router.get("", response_model=list[IncidentResponse])
def list_incidents(
    limit: int = Query(50, ge=1, le=100),
    session: Session = Depends(get_db_session),
) -> list[IncidentResponse]:
    """List incidents that have not been deleted, most recent first."""
    try:
        rows = (
            session.query(Incident)
            .filter(Incident.deleted_at.is_(None))
            .order_by(Incident.created_at.desc(), Incident.id.desc())
            .limit(limit)
            .all()
        )
        logger.info("incident.list", count=len(rows))
        return [IncidentResponse.model_validate(i) for i in rows]

    except OperationalError as e:
        logger.error("incident.list.db_error", error=str(e), exc_info=True)
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.post("", response_model=IncidentResponse, status_code=201)
def create_incident(
    payload: IncidentCreateRequest, session: Session = Depends(get_db_session)
) -> IncidentResponse:
    """Create an incident."""
    try:
        inc = Incident(
            name=payload.name,
            status=payload.status,
            message=payload.message,
            visible=payload.visible,
            stickied=payload.stickied,
            scheduled_at=to_app_timezone(payload.scheduled_at),
        )
        session.add(inc)
        session.commit()
        session.refresh(inc)

        record_incident("created")
        logger.info(
            "incident.created",
            incident_id=inc.id,
            status=inc.status,
            scheduled=inc.is_scheduled,
        )
        return IncidentResponse.model_validate(inc)

    except IntegrityError as e:
        session.rollback()
        logger.error("incident.create.integrity_error", error=str(e), exc_info=True)
        raise HTTPException(status_code=409, detail="Incident conflict")
    except OperationalError as e:
        logger.error("incident.create.db_error", error=str(e), exc_info=True)
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.get("/{incident_id}", response_model=IncidentResponse, name="api_incident")
def get_incident(
    incident_id: int, session: Session = Depends(get_db_session)
) -> IncidentResponse:
    try:
        return IncidentResponse.model_validate(get_incident_or_404(session, incident_id))
    except OperationalError as e:
        logger.error(
            "incident.get.db_error", error=str(e), incident_id=incident_id, exc_info=True
        )
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.delete("/{incident_id}", response_model=DeletedResponse)
def delete_incident(
    incident_id: int, session: Session = Depends(get_db_session)
) -> DeletedResponse:
    """
    Delete an incident.

    The row is kept with deleted_at set, so it disappears from the API and the
    status page while its updates remain for auditing.
    """
    try:
        inc = get_incident_or_404(session, incident_id)
        inc.soft_delete()
        session.add(inc)
        session.commit()

        record_incident("deleted")
        logger.info("incident.deleted", incident_id=incident_id)
        return DeletedResponse(id=incident_id)

    except HTTPException:
        raise
    except OperationalError as e:
        logger.error(
            "incident.delete.db_error", error=str(e), incident_id=incident_id, exc_info=True
        )
        raise HTTPException(status_code=503, detail="Database unavailable")
