"""
vps-back — Middleware Tests
============================

What we test:
    ✅ Client request IDs are reused only when they are safe tokens
    ✅ Access log level follows the status class
    ✅ Redirects are logged with their target
"""

import logging

import pytest

from vps_back.middleware.logging import level_for_status
from vps_back.middleware.request_id import resolve_request_id


class TestResolveRequestId:

    def test_client_id_reused(self):
        assert resolve_request_id("deploy-2024.10_a") == "deploy-2024.10_a"

    @pytest.mark.parametrize("incoming", [None, "", "has space", "x" * 65, "line\nbreak"])
    def test_unsafe_or_missing_id_replaced(self, incoming):
        rid = resolve_request_id(incoming)
        assert rid != incoming
        assert len(rid) == 8


@pytest.mark.parametrize(
    "status, level",
    [(200, logging.INFO), (302, logging.INFO), (404, logging.WARNING), (503, logging.ERROR)],
)
def test_level_for_status(status, level):
    assert level_for_status(status) == level


@pytest.mark.asyncio
async def test_redirect_logged_with_target(test_client, caplog):
    with caplog.at_level(logging.INFO, logger="vps_back.access"):
        await test_client.get("/brew/track/rona/rona-1.0.0.sonoma.bottle.tar.gz")

    lines = [r.getMessage() for r in caplog.records if r.name == "vps_back.access"]
    assert any(
        " 302 " in line
        and line.endswith("-> https://github.com/rona-rs/rona/releases/download/v1.0.0/rona-1.0.0.sonoma.bottle.tar.gz")
        for line in lines
    )
