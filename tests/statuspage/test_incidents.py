"""
Tests for the incidents API.
"""
from datetime import UTC, datetime

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from services.statuspage.app.core.dates import DateFactory
from services.statuspage.app.core.routing import make_url_builder
from services.statuspage.app.core.translation import Translator
from services.statuspage.app.models.incidents import Incident
from services.statuspage.app.presenters.incident_update import IncidentUpdatePresenter
from services.statuspage.app.services.markdown import MarkdownRenderer


class TestCreateIncident:
    def test_create_incident_success(self, client: TestClient, db_session: Session):
        payload = {
            "name": "  Elevated API error rates ",
            "status": 1,
            "message": "We are investigating.",
        }

        response = client.post("/v1/incidents", json=payload)

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Elevated API error rates"
        assert data["status"] == 1
        assert data["visible"] is True
        assert data["stickied"] is False
        assert data["scheduled_at"] is None

        incident = db_session.get(Incident, data["id"])
        assert incident is not None
        assert incident.message == "We are investigating."

    def test_create_scheduled_incident(self, client: TestClient, db_session: Session):
        payload = {
            "name": "Database maintenance",
            "status": 0,
            "scheduled_at": "2026-10-21T22:00:00+00:00",
        }

        response = client.post("/v1/incidents", json=payload)

        assert response.status_code == 201
        incident = db_session.get(Incident, response.json()["id"])
        assert incident.is_scheduled is True

    def test_scheduled_at_offset_is_kept(
        self, client: TestClient, db_session: Session, make_update
    ):
        payload = {
            "name": "Database maintenance",
            "status": 0,
            "scheduled_at": "2026-10-21T22:00:00+02:00",
        }

        response = client.post("/v1/incidents", json=payload)

        assert response.status_code == 201
        assert response.json()["scheduled_at"].startswith("2026-10-21T20:00:00")
        incident = db_session.get(Incident, response.json()["id"])
        update = make_update(incident, status=0, message="Maintenance is scheduled.")
        presenter = IncidentUpdatePresenter(
            update,
            dates=DateFactory(clock=lambda: datetime(2026, 10, 19, 14, 30, tzinfo=UTC)),
            translator=Translator("en"),
            url_for=make_url_builder(base_url="https://status.example.com"),
            markdown=MarkdownRenderer(),
        )
        assert presenter.timestamp_iso == "2026-10-21T20:00:00+00:00"
        assert presenter.scheduled_at_formatted == "Wednesday 21 October 2026 20:00:00"

    def test_create_incident_invalid_status(self, client: TestClient):
        response = client.post("/v1/incidents", json={"name": "Outage", "status": 5})

        assert response.status_code == 422
        assert response.json()["detail"] == "Validation error"

    def test_create_incident_blank_name(self, client: TestClient):
        response = client.post("/v1/incidents", json={"name": "   ", "status": 1})

        assert response.status_code == 422


class TestReadIncidents:
    def test_list_incidents_newest_first(self, client: TestClient, make_incident):
        first = make_incident(name="First")
        second = make_incident(name="Second")

        response = client.get("/v1/incidents")

        assert response.status_code == 200
        ids = [i["id"] for i in response.json()]
        assert ids.index(second.id) < ids.index(first.id)

    def test_list_incidents_excludes_deleted(self, client: TestClient, make_incident, db_session: Session):
        incident = make_incident(name="Gone")
        incident.soft_delete()
        db_session.commit()

        response = client.get("/v1/incidents")

        assert incident.id not in [i["id"] for i in response.json()]

    def test_list_incidents_limit(self, client: TestClient, make_incident):
        for n in range(3):
            make_incident(name=f"Incident {n}")

        response = client.get("/v1/incidents", params={"limit": 2})

        assert response.status_code == 200
        assert len(response.json()) == 2

    def test_get_incident(self, client: TestClient, make_incident):
        incident = make_incident(name="API outage")

        response = client.get(f"/v1/incidents/{incident.id}")

        assert response.status_code == 200
        assert response.json()["name"] == "API outage"

    def test_get_incident_not_found(self, client: TestClient):
        response = client.get("/v1/incidents/99999")

        assert response.status_code == 404


class TestDeleteIncident:
    def test_delete_incident_is_soft(self, client: TestClient, make_incident, db_session: Session):
        incident = make_incident()

        response = client.delete(f"/v1/incidents/{incident.id}")

        assert response.status_code == 200
        assert response.json() == {"ok": True, "id": incident.id}
        assert db_session.get(Incident, incident.id).is_deleted is True
        assert client.get(f"/v1/incidents/{incident.id}").status_code == 404

    def test_delete_incident_not_found(self, client: TestClient):
        assert client.delete("/v1/incidents/99999").status_code == 404
