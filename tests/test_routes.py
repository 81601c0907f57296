"""
vps-back — API Route Tests
===========================

What:  End-to-end tests through the FastAPI app (middleware, auth,
       exception handlers, routers) on a per-test SQLite database.
How:   HTTPX AsyncClient over ASGITransport; redirects are not followed so
       the 302 and its Location header can be inspected.
"""

from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import func, select

from vps_back.exceptions import DatabaseError
from vps_back.models.brew_download import DownloadRecord
from vps_back.services.brew_service import brew_service

BOTTLE = "rona-2.17.7.arm64_sequoia.bottle.tar.gz"


class TestRootAndHealth:

    @pytest.mark.asyncio
    async def test_root_greeting(self, test_client):
        response = await test_client.get("/")

        assert response.status_code == 200
        assert response.json() == {"data": {"message": "Hello, I'm Tom Planche!"}}

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, test_client):
        response = await test_client.get("/", headers={"X-Request-ID": "trace-42"})
        assert response.headers["X-Request-ID"] == "trace-42"


class TestBrewRoutes:

    @pytest.mark.asyncio
    async def test_track_redirects_to_release(self, test_client):
        response = await test_client.get(f"/brew/track/rona/{BOTTLE}")

        assert response.status_code == 302
        assert response.headers["location"] == (
            f"https://github.com/rona-rs/rona/releases/download/v2.17.7/{BOTTLE}"
        )

    @pytest.mark.asyncio
    async def test_track_then_stats(self, test_client):
        for _ in range(3):
            await test_client.get(f"/brew/track/rona/{BOTTLE}")
        await test_client.get("/brew/track/rona/rona-2.17.7.x86_64_linux.bottle.tar.gz")
        await test_client.get("/brew/track/rona/rona-2.18.0.arm64_sequoia.bottle.tar.gz")

        response = await test_client.get("/brew/stats")

        assert response.status_code == 200
        assert response.json() == {
            "data": {
                "rona": {
                    "total_downloads": 5,
                    "total_installs": 5,
                    "2.17.7": {"downloads": 4, "installs": 4},
                    "2.18.0": {"downloads": 1, "installs": 1},
                }
            }
        }

    @pytest.mark.asyncio
    async def test_stats_empty(self, test_client):
        response = await test_client.get("/brew/stats")
        assert response.json() == {"data": {}}

    @pytest.mark.asyncio
    async def test_unknown_project_is_404_and_not_recorded(self, test_client, session_factory):
        response = await test_client.get(
            "/brew/track/nope/nope-1.0.0.sonoma.bottle.tar.gz",
            headers={"X-Request-ID": "req-404"},
        )

        assert response.status_code == 404
        assert response.json() == {
            "error": {"code": "not_found", "message": "Unknown project: nope"},
            "request_id": "req-404",
        }
        async with session_factory() as session:
            rows = (await session.execute(select(func.count(DownloadRecord.id)))).scalar()
        assert rows == 0

    @pytest.mark.asyncio
    async def test_unparseable_filename_is_400(self, test_client):
        response = await test_client.get("/brew/track/rona/rona.tar.gz")

        assert response.status_code == 400
        assert response.json()["error"] == {
            "code": "validation_error",
            "message": "Could not parse filename: rona.tar.gz",
        }

    @pytest.mark.asyncio
    async def test_database_failure_is_generic_500(self, test_client):
        failing = AsyncMock(side_effect=DatabaseError(message="connection reset"))
        with patch.object(brew_service, "record_download", failing):
            response = await test_client.get(f"/brew/track/rona/{BOTTLE}")

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "server_error"
        assert error["message"] == "Internal server error"


class TestSourceRoutes:

    @pytest.mark.asyncio
    async def test_missing_api_key(self, test_client):
        response = await test_client.get("/secure/source")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "unauthorized"

    @pytest.mark.asyncio
    async def test_wrong_api_key(self, test_client):
        response = await test_client.post(
            "/secure/source", json={"source": "github"}, headers={"x-api-key": "wrong"},
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_increment_and_list(self, test_client, auth_headers):
        first = await test_client.post("/secure/source", json={"source": "github"}, headers=auth_headers)
        second = await test_client.post("/secure/source", json={"source": " github "}, headers=auth_headers)
        await test_client.post("/secure/source", json={"source": "linkedin"}, headers=auth_headers)

        assert first.json() == {"data": {"github": 1}}
        assert second.json() == {"data": {"github": 2}}

        response = await test_client.get("/secure/source?page=0&limit=0", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["data"] == {"sources": {"github": 2, "linkedin": 1}}
        assert body["_metadata"]["page"] == 1
        assert body["_metadata"]["limit"] == 20
        assert body["_metadata"]["total_count"] == 2
        assert body["_metadata"]["_links"] == {"self": "/secure/source"}

    @pytest.mark.asyncio
    async def test_blank_source_is_400(self, test_client, auth_headers):
        response = await test_client.post("/secure/source", json={"source": "  "}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "validation_error"


class TestStickerRoutes:

    STICKER = {
        "name": "Eiffel",
        "latitude": 48.8584,
        "longitude": 2.2945,
        "place_name": "Paris",
        "pictures": ["https://example.com/eiffel.jpg"],
    }

    @pytest.mark.asyncio
    async def test_requires_api_key(self, test_client):
        response = await test_client.get("/secure/stickers/1")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_get_and_list(self, test_client, auth_headers):
        created = await test_client.post("/secure/stickers", json=self.STICKER, headers=auth_headers)

        assert created.status_code == 201
        sticker = created.json()["data"]["sticker"]
        assert sticker["place_name"] == "Paris"

        fetched = await test_client.get(f"/secure/stickers/{sticker['id']}", headers=auth_headers)
        assert fetched.status_code == 200
        assert fetched.json()["data"]["sticker"]["pictures"] == ["https://example.com/eiffel.jpg"]

        listing = await test_client.get("/secure/stickers?page=1&limit=5", headers=auth_headers)
        body = listing.json()
        assert [s["id"] for s in body["data"]["stickers"]] == [sticker["id"]]
        assert body["_metadata"]["page_count"] == 1

    @pytest.mark.asyncio
    async def test_sticker_not_found(self, test_client, auth_headers):
        response = await test_client.get("/secure/stickers/999", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["error"]["message"] == "Sticker with id 999 not found"

    @pytest.mark.asyncio
    async def test_out_of_range_latitude_is_rejected(self, test_client, auth_headers):
        response = await test_client.post(
            "/secure/stickers", json={**self.STICKER, "latitude": 91}, headers=auth_headers,
        )
        assert response.status_code == 422
