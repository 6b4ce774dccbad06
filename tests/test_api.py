"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from cdpfilter.main import app
from cdpfilter.routes import get_store
from cdpfilter.session import issue_access_token
from cdpfilter.store import SavedFilterStore


def _headers(sub="user-1", roles=("read:data",)):
    token, _ = issue_access_token({"sub": sub, "email": f"{sub}@example.com"}, list(roles))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client(tmp_path):
    sf_store = SavedFilterStore(tmp_path / "saved.json")
    sf_store.load()
    app.dependency_overrides[get_store] = lambda: sf_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


PEOPLE = [
    {"first_name": "Alice", "status": "active", "tags": ["vip"]},
    {"first_name": "Bob", "status": "inactive", "tags": []},
]


class TestAuth:
    """Test cases for bearer token checks."""

    def test_healthz_is_public(self, client):
        body = client.get("/healthz").json()
        assert body["ok"] is True
        assert "profile" in body["fieldSets"]

    def test_missing_token(self, client):
        assert client.get("/fields").status_code == 401

    def test_bad_token(self, client):
        r = client.get("/fields", headers={"Authorization": "Bearer nope"})
        assert r.status_code == 401

    def test_missing_role(self, client):
        assert client.get("/fields", headers=_headers(roles=())).status_code == 403

    def test_me(self, client):
        assert client.get("/me", headers=_headers()).json()["sub"] == "user-1"


class TestCatalogEndpoints:
    """Test cases for field and operator listings."""

    def test_field_set(self, client):
        body = client.get("/fields/log", headers=_headers()).json()
        assert {"key": "duration", "label": "Duration (ms)", "type": "number", "validation": {"required": False, "min": 0}} in body["fields"]

    def test_unknown_field_set(self, client):
        assert client.get("/fields/nope", headers=_headers()).status_code == 404

    def test_operators(self, client):
        body = client.get("/operators", headers=_headers()).json()
        assert [o["value"] for o in body["boolean"]] == ["is_true", "is_false"]

    def test_unknown_operator_type(self, client):
        assert client.get("/operators/money", headers=_headers()).status_code == 404


class TestFilterEndpoint:
    """Test cases for /filter and /evaluate."""

    def test_filters_records(self, client):
        payload = {
            "fieldSet": "profile",
            "filters": [{"conditions": [{"field": "status", "operator": "equals", "value": "active"}]}],
            "records": PEOPLE,
        }
        body = client.post("/filter", json=payload, headers=_headers()).json()
        assert body["records"] == [PEOPLE[0]]
        assert body["total"] == 2
        assert body["matched"] == 1

    def test_or_across_groups(self, client):
        payload = {
            "fieldSet": "profile",
            "filters": [
                {"conditions": [{"field": "status", "operator": "equals", "value": "active"}]},
                {"conditions": [{"field": "first_name", "operator": "contains", "value": "Bob"}]},
            ],
            "records": PEOPLE,
        }
        assert client.post("/filter", json=payload, headers=_headers()).json()["matched"] == 2

    def test_unconfigured_groups_are_dropped(self, client):
        payload = {
            "fieldSet": "profile",
            "filters": [
                {"conditions": [{"field": "tags", "operator": "includes", "value": "vip"}]},
                {"conditions": [{"field": "", "operator": ""}]},
            ],
            "records": PEOPLE,
        }
        assert client.post("/filter", json=payload, headers=_headers()).json()["records"] == [PEOPLE[0]]

    def test_strict_rejects_bad_operator(self, client):
        payload = {
            "fieldSet": "profile",
            "filters": [{"conditions": [{"field": "tags", "operator": "contains", "value": "vip"}]}],
            "records": PEOPLE,
        }
        r = client.post("/filter", json=payload, headers=_headers())
        assert r.status_code == 400
        assert "not allowed" in r.json()["detail"]

    def test_lenient_mode_fails_closed(self, client):
        payload = {
            "fieldSet": "profile",
            "filters": [{"conditions": [{"field": "tags", "operator": "contains", "value": "vip"}]}],
            "records": PEOPLE,
        }
        body = client.post("/filter?strict=false", json=payload, headers=_headers()).json()
        assert body["records"] == []

    def test_schema_error(self, client):
        payload = {"fieldSet": "profile", "filters": [{"conditions": "nope"}], "records": []}
        assert client.post("/filter", json=payload, headers=_headers()).status_code == 400

    def test_too_many_groups(self, client):
        groups = [{"conditions": [{"field": "first_name", "operator": "is_empty"}]}] * 11
        payload = {"fieldSet": "profile", "filters": groups, "records": []}
        r = client.post("/filter", json=payload, headers=_headers())
        assert r.status_code == 400
        assert "Too many" in r.json()["detail"]

    def test_unknown_field_set(self, client):
        payload = {"fieldSet": "nope", "filters": [], "records": PEOPLE}
        assert client.post("/filter", json=payload, headers=_headers()).status_code == 404

    def test_advisory_warnings(self, client):
        payload = {
            "fieldSet": "profile",
            "filters": [{"conditions": [{"field": "total_spent", "operator": "greater_than", "value": -5}]}],
            "records": [{"total_spent": 10}],
        }
        body = client.post("/filter", json=payload, headers=_headers()).json()
        assert body["matched"] == 1
        assert body["warnings"] == ["Total Spent: -5 is below the minimum 0"]

    def test_strict_enum_value_ignores_case(self, client):
        payload = {
            "fieldSet": "list_member",
            "filters": [{"conditions": [{"field": "status", "operator": "equals", "value": "Subscribed"}]}],
            "records": [{"status": "subscribed"}, {"status": "bounced"}],
        }
        r = client.post("/filter", json=payload, headers=_headers())
        assert r.status_code == 200
        assert r.json()["matched"] == 1

    def test_evaluate(self, client):
        payload = {
            "fieldSet": "log",
            "filters": [{"conditions": [{"field": "status_code", "operator": "greater_equal", "value": 500}]}],
            "record": {"status_code": "503"},
        }
        assert client.post("/evaluate", json=payload, headers=_headers()).json() == {"matches": True}


class TestValidateEndpoint:
    """Test cases for /validate."""

    def test_valid(self, client):
        payload = {"fieldSet": "campaign", "filters": [{"conditions": [{"field": "channel", "operator": "equals", "value": "sms"}]}]}
        assert client.post("/validate", json=payload, headers=_headers()).json() == {
            "valid": True, "errors": [], "warnings": [],
        }

    def test_invalid(self, client):
        payload = {"fieldSet": "campaign", "filters": [{"conditions": [{"field": "channel", "operator": "equals", "value": "fax"}]}]}
        body = client.post("/validate", json=payload, headers=_headers()).json()
        assert body["valid"] is False
        assert "not an option" in body["errors"][0]


class TestSavedFilterEndpoints:
    """Test cases for /saved-filters."""

    def _create(self, client, **extra):
        payload = {
            "name": "VIPs",
            "filterData": [{"conditions": [{"field": "tags", "operator": "includes", "value": "vip"}]}],
            **extra,
        }
        r = client.post("/saved-filters", json=payload, headers=_headers())
        assert r.status_code == 201
        return r.json()

    def test_create_and_list(self, client):
        created = self._create(client, tags=["vip"])
        assert created["userId"] == "user-1"
        listed = client.get("/saved-filters", headers=_headers()).json()["filters"]
        assert [f["id"] for f in listed] == [created["id"]]

    def test_private_filters_hidden_from_others(self, client):
        created = self._create(client)
        r = client.get(f"/saved-filters/{created['id']}", headers=_headers(sub="user-2"))
        assert r.status_code == 403
        assert client.get("/saved-filters", headers=_headers(sub="user-2")).json()["filters"] == []

    def test_update(self, client):
        created = self._create(client)
        r = client.patch(f"/saved-filters/{created['id']}", json={"name": "Top", "isPublic": True}, headers=_headers())
        assert r.status_code == 200
        assert r.json()["name"] == "Top"
        assert r.json()["isPublic"] is True

    def test_update_by_other_user(self, client):
        created = self._create(client, isPublic=True)
        r = client.patch(f"/saved-filters/{created['id']}", json={"name": "Mine"}, headers=_headers(sub="user-2"))
        assert r.status_code == 403

    def test_use_bumps_count(self, client):
        created = self._create(client)
        body = client.post(f"/saved-filters/{created['id']}/use", headers=_headers()).json()
        assert body["usageCount"] == 1

    def test_popular(self, client):
        quiet = self._create(client, isPublic=True)
        busy = self._create(client, isPublic=True)
        self._create(client)
        for _ in range(2):
            client.post(f"/saved-filters/{busy['id']}/use", headers=_headers())
        client.post(f"/saved-filters/{quiet['id']}/use", headers=_headers())

        r = client.get("/saved-filters/popular", headers=_headers(sub="user-2"))
        assert r.status_code == 200
        assert [f["id"] for f in r.json()["filters"]] == [busy["id"], quiet["id"]]

        limited = client.get("/saved-filters/popular?limit=1", headers=_headers()).json()["filters"]
        assert [f["id"] for f in limited] == [busy["id"]]

    def test_popular_rejects_bad_limit(self, client):
        assert client.get("/saved-filters/popular?limit=0", headers=_headers()).status_code == 422

    def test_delete(self, client):
        created = self._create(client)
        assert client.delete(f"/saved-filters/{created['id']}", headers=_headers()).status_code == 204
        assert client.get(f"/saved-filters/{created['id']}", headers=_headers()).status_code == 404

    def test_invalid_filter_data(self, client):
        payload = {"name": "Bad", "filterData": [{"conditions": [{"field": "a", "operator": "like"}]}]}
        assert client.post("/saved-filters", json=payload, headers=_headers()).status_code == 400
