"""Tests for spacache.app — the ASGI application and TestClient."""

import logging
from pathlib import Path
from typing import Any

import pytest

from spacache.app import App
from spacache.config import SpaConfig
from spacache.handler import CallbackContext
from spacache.testing import TestClient


class TestServing:
    async def test_static_file(self, dist: Path) -> None:
        app = App(SpaConfig(dist=dist))

        async with TestClient(app) as client:
            response = await client.get("/app.js")

        assert response.status == 200
        assert response.text == (dist / "app.js").read_text()
        assert "javascript" in response.content_type
        assert response.header("content-length") == str(len((dist / "app.js").read_bytes()))

    async def test_fallback(self, dist: Path) -> None:
        app = App(SpaConfig(dist=dist))

        async with TestClient(app) as client:
            response = await client.get("/settings/profile")

        assert response.status == 200
        assert response.text == (dist / "index.html").read_text()
        assert response.content_type == "text/html; charset=utf-8"

    async def test_injector_sees_full_url(self, dist: Path) -> None:
        def injector(ctx: CallbackContext) -> str:
            return f"{ctx.url.netloc}|{ctx.url.path}|{ctx.url.query}"

        app = App(SpaConfig(dist=dist, placeholder="<!--X-->"), injector=injector)

        async with TestClient(app) as client:
            response = await client.get("/a/b?c=d")

        assert "testserver|/a/b|c=d" in response.text
        assert "<!--X-->" not in response.text

    async def test_headers_callback(self, dist: Path) -> None:
        app = App(SpaConfig(dist=dist), headers=lambda ctx: {"Cache-Control": "no-store"})

        async with TestClient(app) as client:
            hit = await client.get("/assets/style.css")
            miss = await client.get("/missing")

        assert hit.header("cache-control") == "no-store"
        assert miss.header("cache-control") == "no-store"
        assert hit.content_type.startswith("text/css")

    async def test_head_has_length_but_no_body(self, dist: Path) -> None:
        app = App(SpaConfig(dist=dist))

        async with TestClient(app) as client:
            response = await client.head("/app.js")

        assert response.status == 200
        assert response.body == b""
        assert response.header("content-length") == str(len((dist / "app.js").read_bytes()))

    async def test_any_method_is_served(self, dist: Path) -> None:
        app = App(SpaConfig(dist=dist))

        async with TestClient(app) as client:
            response = await client.request("POST", "/app.js", body=b"ignored")

        assert response.text == (dist / "app.js").read_text()

    async def test_disabled(self, tmp_path: Path) -> None:
        app = App(SpaConfig(dist=tmp_path / "missing", disabled=True))

        async with TestClient(app) as client:
            response = await client.get("/anything")

        assert response.status == 501
        assert response.text == "spacache disabled"


    async def test_percent_encoded_path(self, dist: Path) -> None:
        (dist / "my file.js").write_text("spaced();")
        app = App(SpaConfig(dist=dist))

        async with TestClient(app) as client:
            response = await client.get("/my%20file.js")

        assert response.text == "spaced();"


class TestErrors:
    async def test_callback_error_becomes_500(
        self, dist: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        def injector(ctx: CallbackContext) -> str:
            raise RuntimeError("injector failed")

        app = App(SpaConfig(dist=dist), injector=injector)

        async with TestClient(app) as client:
            with caplog.at_level(logging.ERROR, logger="spacache.server"):
                response = await client.get("/route")
            static = await client.get("/app.js")

        assert response.status == 500
        assert response.text == "Internal Server Error"
        assert "500 GET /route" in caplog.text
        assert static.status == 200

    async def test_lazy_load_failure_becomes_500(self, tmp_path: Path) -> None:
        app = App(SpaConfig(dist=tmp_path / "missing"))
        client = TestClient(app)

        response = await client.get("/")

        assert response.status == 500
        assert app.handler is None


class TestStartup:
    async def test_startup_loads_once(self, dist: Path) -> None:
        app = App(SpaConfig(dist=dist))

        first = await app.startup()
        second = await app.startup()

        assert first is second
        assert app.handler is first

    async def test_lazy_load_on_first_request(self, dist: Path) -> None:
        app = App(SpaConfig(dist=dist))
        assert app.handler is None

        response = await TestClient(app).get("/app.js")

        assert response.status == 200
        assert app.handler is not None


async def _run_lifespan(app: App) -> list[dict[str, Any]]:
    messages = [{"type": "lifespan.startup"}, {"type": "lifespan.shutdown"}]
    sent: list[dict[str, Any]] = []

    async def receive() -> dict[str, Any]:
        return messages.pop(0)

    async def send(message: dict[str, Any]) -> None:
        sent.append(message)

    await app({"type": "lifespan", "asgi": {"version": "3.0"}}, receive, send)
    return sent


class TestLifespan:
    async def test_startup_and_shutdown(self, dist: Path) -> None:
        app = App(SpaConfig(dist=dist))

        sent = await _run_lifespan(app)

        assert [m["type"] for m in sent] == [
            "lifespan.startup.complete",
            "lifespan.shutdown.complete",
        ]
        assert app.handler is not None

    async def test_missing_index_fails_startup(self, dist: Path) -> None:
        app = App(SpaConfig(dist=dist, glob="**/*.css"))

        sent = await _run_lifespan(app)

        assert sent[0]["type"] == "lifespan.startup.failed"
        assert "index.html" in sent[0]["message"]
        assert len(sent) == 1

    async def test_disabled_startup_skips_loading(self, tmp_path: Path) -> None:
        app = App(SpaConfig(dist=tmp_path / "missing", disabled=True))

        sent = await _run_lifespan(app)

        assert sent[0]["type"] == "lifespan.startup.complete"

    async def test_non_http_scope_ignored(self, dist: Path) -> None:
        app = App(SpaConfig(dist=dist))
        sent: list[dict[str, Any]] = []

        async def receive() -> dict[str, Any]:
            return {"type": "websocket.connect"}

        async def send(message: dict[str, Any]) -> None:
            sent.append(message)

        await app({"type": "websocket", "path": "/"}, receive, send)

        assert sent == []


class TestTestClient:
    def test_has_docstring(self) -> None:
        assert TestClient.__doc__ is not None
        assert "test client" in TestClient.__doc__

    def test_not_collected_by_pytest(self) -> None:
        assert TestClient.__test__ is False
