"""
tests/test_api_routes.py — FastAPI Route Integration Tests
============================================================
Exercises every handler through the TestClient against a tmp-dir
filesystem backend:

- the ``{success, message}`` envelope and status codes
- admin token and bot secret gates
- the end-to-end blog scenarios
"""

from __future__ import annotations

import hashlib
from dataclasses import replace

import pytest

ADMIN = "test-admin-token"
BOT = {"Authorization": "Bearer test-bot-secret"}


def _blog(client, action: str, **body):
    return client.post(f"/api/blog?action={action}", json=body)


# ===========================================================================
# Health, CORS, method handling
# ===========================================================================
class TestPlumbing:
    def test_health(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json()["success"] is True

    @pytest.mark.parametrize("path", ["/api/blog", "/api/teams", "/api/events", "/api/anything"])
    def test_options_short_circuits(self, client, path):
        resp = client.options(path)
        assert resp.status_code == 200
        assert resp.content == b""
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_cors_header_on_get(self, client):
        resp = client.get("/api/teams", headers={"Origin": "https://site.example"})
        assert resp.headers["access-control-allow-origin"] == "*"

    @pytest.mark.parametrize("path", ["/api/teams", "/api/events", "/api/player-mappings", "/api/stats"])
    def test_method_not_allowed(self, client, path):
        resp = client.delete(path)
        assert resp.status_code == 405
        assert resp.json() == {"success": False, "message": "Method not allowed"}

    def test_invalid_json_is_400(self, client):
        resp = client.post(
            "/api/events",
            content=b"{oops",
            headers={**BOT, "Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json()["success"] is False


# ===========================================================================
# Blog
# ===========================================================================
class TestBlogRoutes:
    def test_get_blogs_empty(self, client):
        resp = client.get("/api/blog?action=get_blogs")
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "blogs": []}

    def test_unknown_action(self, client):
        resp = client.get("/api/blog?action=explode")
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "message": "Invalid action: explode"}

    def test_create_then_list_newest_first(self, client):
        older = _blog(client, "create_blog", title="Old", content="x", authToken=ADMIN).json()["blog"]

        resp = _blog(client, "create_blog", title="A", content="B", authToken=ADMIN)
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        blog = body["blog"]
        assert blog["id"] and blog["id"] != older["id"]
        assert blog["excerpt"] == "B..."
        assert blog["files"] == []

        listed = client.get("/api/blog?action=get_blogs").json()["blogs"]
        assert [b["id"] for b in listed] == [blog["id"], older["id"]]

    @pytest.mark.parametrize("token", [None, "", "test-admin", "test-admin-token "])
    def test_create_rejects_bad_token(self, client, token):
        resp = _blog(client, "create_blog", title="A", content="B", authToken=token)
        assert resp.status_code == 401
        assert resp.json() == {"success": False, "message": "Unauthorized"}
        assert client.get("/api/blog?action=get_blogs").json()["blogs"] == []

    def test_create_requires_fields(self, client):
        resp = _blog(client, "create_blog", title="A", authToken=ADMIN)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Title and content are required"

    def test_create_with_non_list_files(self, client):
        resp = _blog(client, "create_blog", title="A", content="B", files="a.png", authToken=ADMIN)
        assert resp.status_code == 200
        assert resp.json()["blog"]["files"] == []

    def test_create_with_non_string_title_is_400(self, client):
        resp = _blog(client, "create_blog", title=5, content="B", authToken=ADMIN)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Title and content are required"

    def test_list_skips_non_object_post(self, client, backend):
        blog = _blog(client, "create_blog", title="A", content="B", authToken=ADMIN).json()["blog"]
        backend.put("blogs/1.json", b"[]")
        resp = client.get("/api/blog?action=get_blogs")
        assert resp.status_code == 200
        assert [b["id"] for b in resp.json()["blogs"]] == [blog["id"]]

    def test_create_without_server_token_is_500(self, make_client, cfg):
        client = make_client(replace(cfg, admin_token=None))
        resp = _blog(client, "create_blog", title="A", content="B", authToken="x")
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "message": "Admin token not configured."}

    def test_delete(self, client):
        blog = _blog(client, "create_blog", title="A", content="B", authToken=ADMIN).json()["blog"]
        resp = _blog(client, "delete_blog", blogId=blog["id"], authToken=ADMIN)
        assert resp.status_code == 200
        assert resp.json() == {"success": True}
        assert client.get("/api/blog?action=get_blogs").json()["blogs"] == []

    def test_delete_missing_is_404(self, client):
        resp = _blog(client, "delete_blog", blogId="123", authToken=ADMIN)
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "Blog not found"}

    def test_delete_requires_id(self, client):
        resp = _blog(client, "delete_blog", authToken=ADMIN)
        assert resp.status_code == 400

    def test_delete_requires_admin(self, client):
        resp = _blog(client, "delete_blog", blogId="123", authToken="nope")
        assert resp.status_code == 401


# ===========================================================================
# Login & password
# ===========================================================================
class TestPasswordRoutes:
    def test_login_with_default_password(self, client):
        resp = _blog(client, "login", password="admin123")
        assert resp.status_code == 200
        assert resp.json() == {"success": True}

    def test_login_wrong_password(self, client):
        resp = _blog(client, "login", password="nope")
        assert resp.status_code == 401
        assert resp.json()["message"] == "Invalid password"

    def test_login_requires_password(self, client):
        assert _blog(client, "login").status_code == 400

    def test_default_config_is_persisted(self, client, store):
        _blog(client, "login", password="admin123")
        stored = store.load_document("config")
        assert stored["password"] == hashlib.sha256(b"admin123test-salt").hexdigest()

    def test_change_password(self, client):
        resp = _blog(
            client, "change_password",
            oldPassword="admin123", newPassword="hunter2", authToken=ADMIN,
        )
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "message": "Password updated successfully"}
        assert _blog(client, "login", password="hunter2").status_code == 200
        assert _blog(client, "login", password="admin123").status_code == 401

    def test_change_password_wrong_old(self, client):
        resp = _blog(
            client, "change_password",
            oldPassword="wrong", newPassword="hunter2", authToken=ADMIN,
        )
        assert resp.status_code == 401
        assert resp.json()["message"] == "Current password is incorrect"
        assert _blog(client, "login", password="admin123").status_code == 200

    def test_change_password_requires_both(self, client):
        resp = _blog(client, "change_password", oldPassword="admin123", authToken=ADMIN)
        assert resp.status_code == 400

    def test_change_password_requires_admin(self, client):
        resp = _blog(client, "change_password", oldPassword="admin123", newPassword="x")
        assert resp.status_code == 401


# ===========================================================================
# Token hand-out
# ===========================================================================
class TestTokenRoute:
    def test_returns_token_for_password(self, client):
        resp = client.post("/api/get-token", json={"password": "admin123"})
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "token": ADMIN}

    def test_wrong_password_forbidden(self, client):
        resp = client.post("/api/get-token", json={"password": "nope"})
        assert resp.status_code == 403
        assert "token" not in resp.json()

    def test_missing_password(self, client):
        assert client.post("/api/get-token", json={}).status_code == 400

    def test_unconfigured(self, make_client, cfg):
        client = make_client(replace(cfg, admin_token=None))
        resp = client.post("/api/get-token", json={"password": "admin123"})
        assert resp.status_code == 500
        assert resp.json()["success"] is False

    def test_get_not_allowed(self, client):
        assert client.get("/api/get-token").status_code == 405


# ===========================================================================
# Bot-driven resources
# ===========================================================================
class TestBotGate:
    @pytest.mark.parametrize("path, payload", [
        ("/api/events", []),
        ("/api/teams", {}),
        ("/api/player-mappings", {}),
        ("/api/stats", []),
    ])
    @pytest.mark.parametrize("headers", [{}, {"Authorization": "test-bot-secret"},
                                         {"Authorization": "Bearer wrong"}])
    def test_rejects_bad_secret(self, client, path, payload, headers):
        resp = client.post(path, json=payload, headers=headers)
        assert resp.status_code == 401
        assert resp.json() == {"success": False, "message": "Unauthorized"}

    def test_unconfigured_secret_is_500(self, make_client, cfg):
        client = make_client(replace(cfg, bot_secret=None))
        resp = client.post("/api/teams", json={}, headers=BOT)
        assert resp.status_code == 500
        assert resp.json()["message"] == "Bot secret not configured."


class TestEventsRoutes:
    def test_round_trip(self, client):
        events = [
            {"id": "1", "name": "Build", "status": "scheduled", "start_time": "2026-11-01T10:00:00Z"},
            {"id": "2", "name": "PvP", "status": "active", "start_time": "2026-10-01T10:00:00Z"},
            {"id": "3", "name": "Old", "status": "completed", "start_time": "2026-09-01T10:00:00Z"},
        ]
        resp = client.post("/api/events", json=events, headers=BOT)
        assert resp.status_code == 200
        assert resp.json() == {"success": True, "message": "Events updated successfully"}

        resp = client.get("/api/events")
        assert resp.headers["cache-control"] == "s-maxage=60, stale-while-revalidate"
        body = resp.json()
        assert [e["id"] for e in body["events"]] == ["2", "1"]
        assert body["totalEvents"] == 3
        assert body["upcomingEvents"] == 2

    def test_requires_array(self, client):
        resp = client.post("/api/events", json={"id": "1"}, headers=BOT)
        assert resp.status_code == 400
        assert resp.json()["message"] == "Events data must be an array"

    def test_empty(self, client):
        assert client.get("/api/events").json() == {
            "success": True, "events": [], "totalEvents": 0, "upcomingEvents": 0,
        }


class TestTeamsRoutes:
    def test_snowflakes_survive_as_strings(self, client):
        payload = (
            b'{"111": {"name": "Red", "leader_id": 987654321098765432,'
            b' "member_details": [{"id": 987654321098765432, "username": "boss"}],'
            b' "created_at": "2026-01-01"}}'
        )
        resp = client.post(
            "/api/teams", content=payload,
            headers={**BOT, "Content-Type": "application/json"},
        )
        assert resp.status_code == 200

        body = client.get("/api/teams").json()
        assert body["totalTeams"] == 1
        assert body["totalMembers"] == 1
        team = body["teams"][0]
        assert team["leader"] == "987654321098765432"
        assert team["members"] == [{"id": "987654321098765432", "username": "boss"}]

    def test_replace_is_wholesale(self, client):
        client.post("/api/teams", json={"1": {"name": "A"}}, headers=BOT)
        client.post("/api/teams", json={"2": {"name": "B"}}, headers=BOT)
        teams = client.get("/api/teams").json()["teams"]
        assert [t["roleId"] for t in teams] == ["2"]

    def test_requires_body(self, client):
        resp = client.post("/api/teams", headers=BOT)
        assert resp.status_code == 400


class TestPlayerMappingsRoutes:
    def test_round_trip(self, client):
        client.post(
            "/api/player-mappings",
            json={"555": {"java": "Steve", "discord_username": "steve"}},
            headers=BOT,
        )
        body = client.get("/api/player-mappings").json()
        assert body == {
            "success": True,
            "mappings": [
                {"discordId": "555", "java": "Steve", "bedrock": None, "discordUsername": "steve"},
            ],
            "totalPlayers": 1,
        }


class TestStatsRoutes:
    def test_upsert_and_sort(self, client):
        client.post("/api/stats", json=[{"uuid": "a", "username": "zoe", "stats": {}}], headers=BOT)
        resp = client.post(
            "/api/stats", json=[{"uuid": "b", "username": "adam", "stats": {"deaths": 3}}], headers=BOT,
        )
        assert resp.json()["updated"] == 1

        body = client.get("/api/stats").json()
        assert [p["username"] for p in body["players"]] == ["adam", "zoe"]
        assert body["totalPlayers"] == 2

    def test_requires_uuid(self, client):
        resp = client.post("/api/stats", json=[{"username": "x"}], headers=BOT)
        assert resp.status_code == 400


# ===========================================================================
# Backend failures
# ===========================================================================
class TestBackendFailure:
    @pytest.fixture
    def broken(self, make_client, cfg):
        from unittest.mock import MagicMock

        from nomadlife.api.deps import get_backend
        from nomadlife.api.main import app
        from nomadlife.storage.base import StorageError

        backend = MagicMock()
        backend.get.side_effect = StorageError("bucket unreachable")
        backend.put.side_effect = StorageError("bucket unreachable")
        backend.list.side_effect = StorageError("bucket unreachable")
        client = make_client(cfg)
        app.dependency_overrides[get_backend] = lambda: backend
        return client

    def test_reads_degrade_to_empty(self, broken):
        assert broken.get("/api/teams").json()["teams"] == []
        assert broken.get("/api/blog?action=get_blogs").json()["blogs"] == []

    def test_writes_report_500(self, broken):
        resp = broken.post("/api/teams", json={}, headers=BOT)
        assert resp.status_code == 500
        assert resp.json() == {"success": False, "message": "Server error: bucket unreachable"}
