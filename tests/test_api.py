"""HTTP tests for the dashboard routes.

The repository dependency is the in-memory store; auth sessions use SQLite.
Run with: pytest tests/test_api.py -v
"""

import pytest

API = "/api/v1"

EVENT_BODY = {
    "name": "Night Fever",
    "date": "2024-06-14",
    "time": "22:00",
    "venue_name": "Skyline Lounge",
    "location": "Downtown",
    "deal_type": "Entrance Deal",
    "rumba_percentage": 50,
    "payment_terms": "50% upfront",
    "partners": [{"name": "Rumba", "percentage": 50}, {"name": "Local Partner", "percentage": 50}],
}

ENTRY_BODY = {
    "date": "2024-06-14",
    "promoters": [{"id": "p1", "name": "John", "commission": 500}, {"id": "p2", "name": "Sarah", "commission": 350}],
    "staff": [],
    "table_commissions": 800,
    "vip_girls_commissions": 300,
    "ad_spend": 400,
    "door_revenue": 4000,
    "total_night_revenue": 12345,
    "attendance": 200,
    "tables_from_rumba": 3,
}


@pytest.fixture
def event(client, auth_headers):
    resp = client.post(f"{API}/events", json=EVENT_BODY, headers=auth_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


@pytest.fixture
def entry(client, auth_headers, event):
    resp = client.post(f"{API}/events/{event['id']}/entries", json=ENTRY_BODY, headers=auth_headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


class TestHealth:
    """Tests for unauthenticated infrastructure routes."""

    def test_healthz(self, client):
        """Liveness check answers without a token."""
        assert client.get("/healthz").json() == {"status": "ok"}

    def test_metrics(self, client):
        """Prometheus metrics are exposed."""
        resp = client.get("/metrics")
        assert resp.status_code == 200


class TestAuth:
    """Tests for session routes."""

    def test_login_returns_token_pair(self, client):
        """Valid credentials return access and refresh tokens."""
        resp = client.post(f"{API}/auth/login", json={"username": "admin", "password": "password"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["token_type"] == "bearer"
        assert body["user"] == {"username": "admin"}
        assert body["access_token"] and body["refresh_token"]

    def test_login_bad_password(self, client):
        """Wrong credentials give the error envelope with 401."""
        resp = client.post(f"{API}/auth/login", json={"username": "admin", "password": "nope"})

        assert resp.status_code == 401
        assert resp.json()["code"] == "INVALID_CREDENTIALS"

    def test_oauth2_form_login(self, client):
        """The OAuth2 password form works for the docs UI."""
        resp = client.post(f"{API}/auth/token", data={"username": "admin", "password": "password"})

        assert resp.status_code == 200

    def test_me(self, client, auth_headers):
        """The current user is resolved from the access token."""
        assert client.get(f"{API}/auth/me", headers=auth_headers).json() == {"username": "admin"}

    def test_data_routes_require_token(self, client):
        """Data routes reject anonymous requests."""
        assert client.get(f"{API}/events").status_code == 401
        assert client.get(f"{API}/dashboard", headers={"Authorization": "Bearer garbage"}).status_code == 401

    def test_refresh_rotates_and_logout_revokes(self, client):
        """A refresh token works once; logout revokes the new one."""
        login = client.post(f"{API}/auth/login", json={"username": "admin", "password": "password"}).json()

        first = client.post(f"{API}/auth/refresh", json={"token": login["refresh_token"]})
        assert first.status_code == 200
        reused = client.post(f"{API}/auth/refresh", json={"token": login["refresh_token"]})
        assert reused.status_code == 401
        assert reused.json()["code"] == "INVALID_TOKEN"

        new_refresh = first.json()["refresh_token"]
        assert client.post(f"{API}/auth/logout", json={"token": new_refresh}).json() == {"ok": True}
        assert client.post(f"{API}/auth/refresh", json={"token": new_refresh}).status_code == 401


class TestEventRoutes:
    """Tests for event CRUD routes."""

    def test_create_and_get(self, client, auth_headers, event):
        """Created events can be read back."""
        resp = client.get(f"{API}/events/{event['id']}", headers=auth_headers)

        assert resp.status_code == 200
        body = resp.json()
        assert body["day_of_week"] == "Friday"
        assert body["deal_type"] == "Entrance Deal"
        assert body["partners"][0] == {"name": "Rumba", "percentage": 50}

    def test_create_rejects_bad_split(self, client, auth_headers):
        """A split that does not add up is a validation error."""
        body = dict(EVENT_BODY, partners=[{"name": "Rumba", "percentage": 50}, {"name": "A", "percentage": 10}])

        resp = client.post(f"{API}/events", json=body, headers=auth_headers)

        assert resp.status_code == 422

    def test_search(self, client, auth_headers, event):
        """q matches name, venue and location case-insensitively."""
        other = dict(EVENT_BODY, name="Latin Night", venue_name="Echo Bar", location="Old Town")
        client.post(f"{API}/events", json=other, headers=auth_headers)

        by_venue = client.get(f"{API}/events", params={"q": "skyline"}, headers=auth_headers).json()
        by_location = client.get(f"{API}/events", params={"q": "OLD town"}, headers=auth_headers).json()

        assert [e["name"] for e in by_venue] == ["Night Fever"]
        assert [e["name"] for e in by_location] == ["Latin Night"]
        assert len(client.get(f"{API}/events", headers=auth_headers).json()) == 2

    def test_update(self, client, auth_headers, event):
        """PUT applies a partial update."""
        resp = client.put(f"{API}/events/{event['id']}", json={"venue_name": "Mirage Club"}, headers=auth_headers)

        assert resp.status_code == 200
        assert resp.json()["venue_name"] == "Mirage Club"
        assert resp.json()["name"] == "Night Fever"

    def test_update_rumba_rebalances(self, client, auth_headers, event):
        """A house-only PUT moves the other partners so the split stays at 100."""
        resp = client.put(f"{API}/events/{event['id']}", json={"rumba_percentage": 70}, headers=auth_headers)

        assert resp.status_code == 200
        assert [(p["name"], p["percentage"]) for p in resp.json()["partners"]] == [("Rumba", 70), ("Local Partner", 30)]

    def test_update_rumba_rounding_rejected(self, client, auth_headers):
        """A house share that cannot be rebalanced to 100 gives a 400 and leaves the event alone."""
        body = dict(EVENT_BODY, rumba_percentage=40, partners=[
            {"name": "Rumba", "percentage": 40}, {"name": "A", "percentage": 30}, {"name": "B", "percentage": 30},
        ])
        created = client.post(f"{API}/events", json=body, headers=auth_headers).json()

        resp = client.put(f"{API}/events/{created['id']}", json={"rumba_percentage": 1}, headers=auth_headers)

        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_PARTNER_SPLIT"
        stored = client.get(f"{API}/events/{created['id']}", headers=auth_headers).json()
        assert [p["percentage"] for p in stored["partners"]] == [40, 30, 30]

    def test_update_blank_name_rejected(self, client, auth_headers, event):
        """PUT cannot clear the event name."""
        resp = client.put(f"{API}/events/{event['id']}", json={"name": ""}, headers=auth_headers)

        assert resp.status_code == 422

    def test_missing_event(self, client, auth_headers):
        """Unknown events give a 404 envelope."""
        resp = client.get(f"{API}/events/evt-missing", headers=auth_headers)

        assert resp.status_code == 404
        assert resp.json() == {"code": "EVENT_NOT_FOUND", "message": "Event not found", "details": None}

    def test_delete_cascades(self, client, auth_headers, event, entry):
        """Deleting an event removes its entries."""
        assert client.delete(f"{API}/events/{event['id']}", headers=auth_headers).status_code == 204

        assert client.get(f"{API}/entries/{entry['id']}", headers=auth_headers).status_code == 404
        assert client.get(f"{API}/entries", headers=auth_headers).json() == []


class TestEntryRoutes:
    """Tests for entry routes."""

    def test_create_keeps_only_active_revenue(self, entry):
        """The revenue field of the other deal type is discarded."""
        assert entry["door_revenue"] == 4000
        assert entry["total_night_revenue"] is None

    def test_create_for_unknown_event(self, client, auth_headers):
        """Entries need an existing event."""
        resp = client.post(f"{API}/events/evt-missing/entries", json=ENTRY_BODY, headers=auth_headers)

        assert resp.status_code == 404

    def test_list_for_event(self, client, auth_headers, event, entry):
        """Entries are listed per event."""
        rows = client.get(f"{API}/events/{event['id']}/entries", headers=auth_headers).json()

        assert [r["id"] for r in rows] == [entry["id"]]

    def test_update_follows_deal_type(self, client, auth_headers, entry):
        """Updates cannot set the inactive revenue field."""
        resp = client.put(
            f"{API}/entries/{entry['id']}",
            json={"attendance": 250, "total_night_revenue": 999},
            headers=auth_headers,
        )

        assert resp.status_code == 200
        assert resp.json()["attendance"] == 250
        assert resp.json()["total_night_revenue"] is None
        assert resp.json()["door_revenue"] == 4000

    def test_delete(self, client, auth_headers, entry):
        """Entries can be deleted; a second delete is 404."""
        assert client.delete(f"{API}/entries/{entry['id']}", headers=auth_headers).status_code == 204
        assert client.delete(f"{API}/entries/{entry['id']}", headers=auth_headers).status_code == 404


class TestReportRoutes:
    """Tests for reports and the dashboard."""

    def test_event_report(self, client, auth_headers, event, entry):
        """The report route runs the calculator."""
        resp = client.get(f"{API}/events/{event['id']}/report", headers=auth_headers)

        assert resp.status_code == 200
        report = resp.json()
        assert report["total_commissions"] == 1950
        assert report["total_expenses"] == 2350
        assert report["profit"] == -350

    def test_report_without_entries(self, client, auth_headers, event):
        """An event with no entries has no report."""
        resp = client.get(f"{API}/events/{event['id']}/report", headers=auth_headers)

        assert resp.status_code == 404
        assert resp.json()["code"] == "REPORT_NOT_FOUND"

    def test_reports_listing(self, client, auth_headers, event, entry):
        """Each event is listed with its report."""
        rows = client.get(f"{API}/reports", headers=auth_headers).json()

        assert rows[0]["event"]["id"] == event["id"]
        assert rows[0]["report"]["total_revenue"] == 4000

    def test_dashboard(self, client, auth_headers, event, entry):
        """The dashboard rolls up every entry."""
        body = client.get(f"{API}/dashboard", headers=auth_headers).json()

        assert body["total_events"] == 1
        assert body["total_revenue"] == 4000
        assert body["total_profit"] == -350
        assert body["avg_attendance"] == 200
        assert [e["id"] for e in body["recent_entries"]] == [entry["id"]]


class TestPartnerRoutes:
    """Tests for the split editor helpers."""

    PARTNERS = [{"name": "Rumba", "percentage": 50}, {"name": "A", "percentage": 30}, {"name": "B", "percentage": 20}]

    def test_rebalance(self, client, auth_headers):
        """Editing the house share redistributes the rest."""
        resp = client.post(
            f"{API}/partners/rebalance",
            json={"partners": self.PARTNERS, "edited_name": "Rumba", "new_percentage": "70"},
            headers=auth_headers,
        )

        assert resp.status_code == 200
        assert [p["percentage"] for p in resp.json()["partners"]] == [70, 18, 12]
        assert resp.json()["valid"] is True

    def test_add_and_validate(self, client, auth_headers):
        """A new row takes the remainder; an unbalanced split fails validation."""
        partners = [{"name": "Rumba", "percentage": 60}]
        added = client.post(f"{API}/partners/add", json={"partners": partners, "name": "A"}, headers=auth_headers)
        assert added.json()["partners"][-1] == {"name": "A", "percentage": 40}

        bad = client.post(
            f"{API}/partners/validate",
            json={"partners": [{"name": "Rumba", "percentage": 60}, {"name": "A", "percentage": 30}]},
            headers=auth_headers,
        )
        assert bad.status_code == 400
        assert bad.json()["code"] == "INVALID_PARTNER_SPLIT"
        assert "(currently 90%)" in bad.json()["message"]

    def test_remove_house_locked(self, client, auth_headers):
        """The house row cannot be removed."""
        resp = client.post(
            f"{API}/partners/remove", json={"partners": self.PARTNERS, "index": 0}, headers=auth_headers
        )

        assert resp.status_code == 400
        assert resp.json()["code"] == "HOUSE_PARTNER_LOCKED"

    def test_row_update(self, client, auth_headers):
        """Row edits coerce the percentage."""
        resp = client.post(
            f"{API}/partners/update",
            json={"partners": self.PARTNERS, "index": 1, "field": "percentage", "value": "35abc"},
            headers=auth_headers,
        )

        assert resp.json()["partners"][1]["percentage"] == 35
        assert resp.json()["total"] == 105
        assert resp.json()["valid"] is False

    def test_index_out_of_range(self, client, auth_headers):
        """Row indexes must exist."""
        resp = client.post(
            f"{API}/partners/remove", json={"partners": self.PARTNERS, "index": 9}, headers=auth_headers
        )

        assert resp.status_code == 422
