"""Tests for the public incident page."""
from fastapi.testclient import TestClient


class TestIncidentPage:
    def test_renders_timeline(self, client: TestClient, make_incident, make_update):
        incident = make_incident(name="Checkout failures")
        update = make_update(incident, status=2, message="Caused by a **bad deploy**.")

        response = client.get(f"/incidents/{incident.id}")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        html = response.text
        assert "Checkout failures" in html
        assert f'id="update-{update.id}"' in html
        assert "<strong>bad deploy</strong>" in html
        assert "icon ion-bug" in html
        assert "Identified" in html
        assert f"/incidents/{incident.id}#update-{update.id}" in html

    def test_localized_page(self, client: TestClient, make_incident, make_update):
        incident = make_incident()
        make_update(incident, status=4, message="Behoben.")

        response = client.get(f"/incidents/{incident.id}", headers={"Accept-Language": "de-DE"})

        assert '<html lang="de">' in response.text
        assert "Aktualisierungen" in response.text
        assert "Behoben" in response.text

    def test_scheduled_incident_shows_schedule(self, client: TestClient, make_incident, make_update):
        from datetime import UTC, datetime

        incident = make_incident(status=0, scheduled_at=datetime(2026, 10, 21, 22, 0, tzinfo=UTC))
        make_update(incident, status=0, message="Planned maintenance.")

        response = client.get(f"/incidents/{incident.id}")

        assert "Scheduled for" in response.text
        assert 'datetime="2026-10-21T22:00:00+00:00"' in response.text
        assert "Wednesday 21 October 2026 22:00:00" in response.text

    def test_no_updates(self, client: TestClient, make_incident):
        incident = make_incident()

        response = client.get(f"/incidents/{incident.id}")

        assert "No updates have been posted yet." in response.text

    def test_hidden_incident_not_found(self, client: TestClient, make_incident):
        incident = make_incident(visible=False)

        assert client.get(f"/incidents/{incident.id}").status_code == 404

    def test_missing_incident_not_found(self, client: TestClient):
        assert client.get("/incidents/99999").status_code == 404
