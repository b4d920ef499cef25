"""
Tests for App: bot registration, route mounting and server startup.

Run with: pytest tests/test_app.py -v
"""

import asyncio
import logging
import socket

import httpx
import pytest
from fastapi.testclient import TestClient

import tenbot.app as app_module
from tenbot.app import App
from tenbot.bot import Bot
from tenbot.config import Settings
from tenbot.errors import BotAlreadyRegisteredError, NoBotsRegisteredError

from conftest import WEBHOOK


def track_sockets(monkeypatch) -> list:
    """Record every socket App creates from now on."""
    created = []

    class TrackingSocket(socket.socket):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            created.append(self)

    monkeypatch.setattr(app_module.socket, "socket", TrackingSocket)
    return created


class TestRegister:

    def test_register_is_chainable(self):
        app = App(host="127.0.0.1", port=0)
        a, b = Bot("a", WEBHOOK), Bot("b", WEBHOOK)

        assert app.register(a, "/a").register(b, "/b") is app
        assert dict(app.bots) == {"/a": a, "/b": b}

    def test_default_path_is_root(self):
        app = App(host="127.0.0.1", port=0)
        bot = Bot("root", WEBHOOK)
        app.register(bot)
        assert app.bots["/"] is bot

    def test_duplicate_path_names_registered_bot(self):
        app = App(host="127.0.0.1", port=0)
        app.register(Bot("first", WEBHOOK), "/foo")

        with pytest.raises(BotAlreadyRegisteredError, match=r"bot \[first\] has already registered on path '/foo'"):
            app.register(Bot("second", WEBHOOK), "foo/")

        assert app.bots["/foo"].name == "first"

    def test_bots_view_is_read_only(self):
        app = App(host="127.0.0.1", port=0)
        with pytest.raises(TypeError):
            app.bots["/"] = Bot("sneaky", WEBHOOK)

    def test_defaults_come_from_settings(self):
        app = App(settings=Settings(host="0.0.0.0", port=9999))
        assert (app.host, app.port) == ("0.0.0.0", 9999)


class TestCreateServer:

    def test_bots_mounted_in_registration_order(self, monkeypatch):
        app = App(host="127.0.0.1", port=0)
        app.register(Bot("z", WEBHOOK), "/z")
        app.register(Bot("a", WEBHOOK), "/a")
        app.register(Bot("root", WEBHOOK))

        mounted = []
        create_router = Bot.create_router

        def recording_create_router(bot, path="/"):
            mounted.append((bot.name, path))
            return create_router(bot, path)

        monkeypatch.setattr(Bot, "create_router", recording_create_router)

        client = TestClient(app.create_server())

        assert mounted == [("z", "/z"), ("a", "/a"), ("root", "/")]
        assert [client.get(path).json()["bot"] for path in ("/z", "/a", "/")] == ["z", "a", "root"]

    @pytest.mark.parametrize("path", ["/docs", "/redoc", "/openapi.json"])
    def test_serves_only_bot_routes(self, path):
        app = App(host="127.0.0.1", port=0).register(Bot("only", WEBHOOK), "/only")
        client = TestClient(app.create_server())

        assert client.get(path).status_code == 404
        assert client.get("/only").json() == {"bot": "only"}

    def test_requests_reach_owning_bot(self):
        app = App(host="127.0.0.1", port=0)
        hits = []
        for name in ("alpha", "beta"):
            bot = Bot(name, WEBHOOK)

            async def handler(payload, context, name=name):
                hits.append((name, payload))

            bot.on_message(handler)
            app.register(bot, name)

        client = TestClient(app.create_server())
        client.post("/beta", json={"n": 1})
        client.post("/alpha", json={"n": 2})

        assert hits == [("beta", {"n": 1}), ("alpha", {"n": 2})]
        assert client.post("/gamma", json={}).status_code == 404


class TestRun:

    @pytest.mark.asyncio
    async def test_no_bots_registered(self, monkeypatch):
        app = App(host="127.0.0.1", port=0)

        def fail_bind(self):
            raise AssertionError("socket must not be bound")

        monkeypatch.setattr(App, "_bind_socket", fail_bind)

        with pytest.raises(NoBotsRegisteredError, match="No bots registered"):
            await app.run()

    @pytest.mark.asyncio
    async def test_serves_registered_bots(self, capsys):
        app = App(host="127.0.0.1", port=0).register(Bot("echo", WEBHOOK), "/echo")

        running = await app.run()
        try:
            assert running.port != 0
            assert f"tenbot app is listening at http://127.0.0.1:{running.port}" in capsys.readouterr().out

            async with httpx.AsyncClient(trust_env=False) as client:
                response = await client.get(f"{running.url}/echo")

            assert response.status_code == 200
            assert response.json() == {"bot": "echo"}
        finally:
            await running.close()

        assert running.task.done()
        assert running.socket.fileno() == -1

    @pytest.mark.asyncio
    async def test_occupied_port(self, monkeypatch):
        blocker = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        blocker.bind(("127.0.0.1", 0))
        blocker.listen()
        port = blocker.getsockname()[1]

        created = track_sockets(monkeypatch)

        app = App(host="127.0.0.1", port=port).register(Bot("late", WEBHOOK))
        try:
            with pytest.raises(OSError):
                await app.run()
        finally:
            monkeypatch.undo()
            blocker.close()

        assert created
        assert all(s.fileno() == -1 for s in created)

    @pytest.mark.asyncio
    async def test_rejected_log_level_leaves_no_socket_open(self, monkeypatch):
        created = track_sockets(monkeypatch)
        settings = Settings(_env_file=None, log_level="WARN")
        app = App(host="127.0.0.1", port=0, settings=settings).register(Bot("noisy", WEBHOOK))

        with pytest.raises(KeyError):
            await app.run()

        assert all(s.fileno() == -1 for s in created)

    @pytest.mark.asyncio
    async def test_server_stopping_before_start(self, monkeypatch):
        created = track_sockets(monkeypatch)

        async def serve(self, sockets=None):
            return None

        monkeypatch.setattr(app_module.uvicorn.Server, "serve", serve)

        app = App(host="127.0.0.1", port=0).register(Bot("quitter", WEBHOOK))
        with pytest.raises(RuntimeError, match="before it started listening"):
            await app.run()

        assert len(created) == 1
        assert created[0].fileno() == -1

    @pytest.mark.asyncio
    async def test_startup_error_propagates(self, monkeypatch):
        created = track_sockets(monkeypatch)

        async def serve(self, sockets=None):
            raise OSError("cannot serve")

        monkeypatch.setattr(app_module.uvicorn.Server, "serve", serve)

        app = App(host="127.0.0.1", port=0).register(Bot("broken", WEBHOOK))
        with pytest.raises(OSError, match="cannot serve"):
            await app.run()

        assert len(created) == 1
        assert created[0].fileno() == -1


class TestServerDone:

    @pytest.mark.asyncio
    async def test_error_after_start_is_only_logged(self, caplog):
        future = asyncio.get_running_loop().create_future()
        future.set_exception(RuntimeError("socket died"))

        with caplog.at_level(logging.ERROR, logger="tenbot.app"):
            App._on_server_done(future)

        assert "socket died" in caplog.text

    @pytest.mark.asyncio
    async def test_clean_stop_logs_nothing(self, caplog):
        future = asyncio.get_running_loop().create_future()
        future.set_result(None)

        with caplog.at_level(logging.ERROR, logger="tenbot.app"):
            App._on_server_done(future)

        assert caplog.text == ""
