import logging

from asgi_lifespan import LifespanManager

import videotube_api.main as main_module
from videotube_api.api.v1.debug import include_debug_routes
from videotube_api.core.config import settings
from videotube_api.core.middleware import TRACE_HEADER


async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"success": True, "message": "Server is running"}


async def test_unknown_route_uses_error_envelope(client):
    r = await client.get("/api/v1/nope")
    assert r.status_code == 404
    assert r.json()["success"] is False


async def test_request_id_is_echoed(client):
    r = await client.get("/health", headers={TRACE_HEADER: "abc-123"})
    assert r.headers[TRACE_HEADER] == "abc-123"


async def test_lifespan_opens_and_closes_mongo(monkeypatch):
    calls = []

    async def fake_get_client():
        calls.append("open")

    async def fake_close_client():
        calls.append("close")

    monkeypatch.setattr(main_module, "get_client", fake_get_client)
    monkeypatch.setattr(main_module, "close_client", fake_close_client)

    root = logging.getLogger()
    handlers = list(root.handlers)
    try:
        async with LifespanManager(main_module.app):
            assert calls == ["open"]
    finally:
        root.handlers = handlers
    assert calls == ["open", "close"]


def test_debug_routes_disabled_by_default(monkeypatch):
    monkeypatch.setattr(settings, "sentry_test_enabled", False)
    assert include_debug_routes(main_module.app) is False


def test_log_filter_uses_configured_service():
    from videotube_api.core.logger import TraceContextFilter

    record = logging.LogRecord("x", logging.INFO, __file__, 1, "m", None, None)
    TraceContextFilter("videotube-worker").filter(record)
    assert record.service == "videotube-worker"
    assert record.trace_id == "-"
