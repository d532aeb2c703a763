from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session

from ....core.logging import get_logger
from ....core.observability import record_incident_update
from ....models.incidents import IncidentUpdate
from ....schemas.incidents import (
    DeletedResponse,
    IncidentUpdateCreateRequest,
    IncidentUpdateEditRequest,
    IncidentUpdateResponse,
)
from ...deps import PresenterFactory, get_db_session, get_update_presenter
from .incidents import get_incident_or_404

router = APIRouter(prefix="/v1/incidents/{incident_id}/updates", tags=["incident-updates"])
logger = get_logger(__name__)


def _get_update_or_404(session: Session, incident_id: int, update_id: int) -> IncidentUpdate:
    get_incident_or_404(session, incident_id)
    update = session.get(IncidentUpdate, update_id)
    if update is None or update.incident_id != incident_id:
        logger.warning(
            "incident_update.not_found", incident_id=incident_id, update_id=update_id
        )
        raise HTTPException(status_code=404, detail="Incident update not found")
    return update


@router.get("", response_model=list[IncidentUpdateResponse])
def list_updates(
    incident_id: int,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    session: Session = Depends(get_db_session),
    present: PresenterFactory = Depends(get_update_presenter),
) -> list[IncidentUpdateResponse]:
    """List the updates of an incident, newest first."""
    try:
        get_incident_or_404(session, incident_id)
        rows = (
            session.query(IncidentUpdate)
            .filter(IncidentUpdate.incident_id == incident_id)
            .order_by(IncidentUpdate.created_at.desc(), IncidentUpdate.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        logger.info("incident_update.list", incident_id=incident_id, count=len(rows))
        return [IncidentUpdateResponse(**present(u).to_dict()) for u in rows]

    except OperationalError as e:
        logger.error(
            "incident_update.list.db_error",
            error=str(e),
            incident_id=incident_id,
            exc_info=True,
        )
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.post("", response_model=IncidentUpdateResponse, status_code=201)
def create_update(
    incident_id: int,
    payload: IncidentUpdateCreateRequest,
    session: Session = Depends(get_db_session),
    present: PresenterFactory = Depends(get_update_presenter),
) -> IncidentUpdateResponse:
    """
    Post an update to an incident.

    The incident takes the status of its latest update.
    """
    try:
        inc = get_incident_or_404(session, incident_id)
        update = IncidentUpdate(
            incident_id=inc.id, status=payload.status, message=payload.message
        )
        inc.status = payload.status
        session.add(update)
        session.add(inc)
        session.commit()
        session.refresh(update)

        record_incident_update("created", payload.status)
        logger.info(
            "incident_update.created",
            incident_id=incident_id,
            update_id=update.id,
            status=payload.status,
        )
        return IncidentUpdateResponse(**present(update).to_dict())

    except HTTPException:
        raise
    except IntegrityError as e:
        session.rollback()
        logger.error(
            "incident_update.create.integrity_error",
            error=str(e),
            incident_id=incident_id,
            exc_info=True,
        )
        raise HTTPException(status_code=409, detail="Incident update conflict")
    except OperationalError as e:
        logger.error(
            "incident_update.create.db_error",
            error=str(e),
            incident_id=incident_id,
            exc_info=True,
        )
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.get("/{update_id}", response_model=IncidentUpdateResponse)
def get_update(
    incident_id: int,
    update_id: int,
    session: Session = Depends(get_db_session),
    present: PresenterFactory = Depends(get_update_presenter),
) -> IncidentUpdateResponse:
    try:
        update = _get_update_or_404(session, incident_id, update_id)
        return IncidentUpdateResponse(**present(update).to_dict())
    except OperationalError as e:
        logger.error(
            "incident_update.get.db_error",
            error=str(e),
            incident_id=incident_id,
            update_id=update_id,
            exc_info=True,
        )
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.put("/{update_id}", response_model=IncidentUpdateResponse)
def edit_update(
    incident_id: int,
    update_id: int,
    payload: IncidentUpdateEditRequest,
    session: Session = Depends(get_db_session),
    present: PresenterFactory = Depends(get_update_presenter),
) -> IncidentUpdateResponse:
    """Change the status or message of an update. Omitted fields are kept."""
    try:
        update = _get_update_or_404(session, incident_id, update_id)
        if payload.status is not None:
            update.status = payload.status
        if payload.message is not None:
            update.message = payload.message
        session.add(update)
        session.commit()
        session.refresh(update)

        record_incident_update("edited", update.status)
        logger.info(
            "incident_update.edited",
            incident_id=incident_id,
            update_id=update_id,
            status=update.status,
        )
        return IncidentUpdateResponse(**present(update).to_dict())

    except HTTPException:
        raise
    except IntegrityError as e:
        session.rollback()
        logger.error(
            "incident_update.edit.integrity_error",
            error=str(e),
            update_id=update_id,
            exc_info=True,
        )
        raise HTTPException(status_code=409, detail="Incident update conflict")
    except OperationalError as e:
        logger.error(
            "incident_update.edit.db_error",
            error=str(e),
            update_id=update_id,
            exc_info=True,
        )
        raise HTTPException(status_code=503, detail="Database unavailable")


@router.delete("/{update_id}", response_model=DeletedResponse)
def delete_update(
    incident_id: int,
    update_id: int,
    session: Session = Depends(get_db_session),
) -> DeletedResponse:
    try:
        update = _get_update_or_404(session, incident_id, update_id)
        status = update.status
        session.delete(update)
        session.commit()

        record_incident_update("deleted", status)
        logger.info("incident_update.deleted", incident_id=incident_id, update_id=update_id)
        return DeletedResponse(id=update_id)

    except HTTPException:
        raise
    except OperationalError as e:
        logger.error(
            "incident_update.delete.db_error",
            error=str(e),
            update_id=update_id,
            exc_info=True,
        )
        raise HTTPException(status_code=503, detail="Database unavailable")
