import asyncio
import json

import aiohttp
import pytest
import requests
from aiohttp import web
from aiohttp import test_utils

from ghrouter import AiohttpTransport, GraphHopperRouter, RequestsTransport, RouterOptions, TransportError
from ghrouter import transport as transport_module
from payloads import make_path, make_response


def make_app(seen):
    async def route(request: web.Request) -> web.Response:
        seen.append(request.query.copy())
        points = request.query.getall("point")
        body = make_response(*[make_path(10 + i) for i in range(len(points) - 1)])
        return web.json_response(body)

    async def broken(request: web.Request) -> web.Response:
        return web.Response(status=500, text="boom")

    async def latin(request: web.Request) -> web.Response:
        return web.Response(body=b"\xff\xfe\xfa", content_type="text/plain", charset="utf-8")

    async def slow(request: web.Request) -> web.Response:
        await asyncio.sleep(0.5)
        return web.json_response({})

    app = web.Application()
    app.router.add_get("/route", route)
    app.router.add_get("/broken", broken)
    app.router.add_get("/latin", latin)
    app.router.add_get("/slow", slow)
    return app


async def with_server(fn):
    seen = []
    server = test_utils.TestServer(make_app(seen))
    await server.start_server()
    try:
        return await fn(server, seen)
    finally:
        await server.close()


async def _test_aiohttp_ok(server, seen):
    body = await AiohttpTransport().fetch(str(server.make_url("/route")) + "?point=1,2&point=3,4")
    assert len(json.loads(body)["paths"]) == 1


async def _test_aiohttp_status(server, seen):
    with pytest.raises(TransportError) as exc:
        await AiohttpTransport().fetch(str(server.make_url("/broken")))
    assert "500" in exc.value.message


async def _test_aiohttp_shared_session(server, seen):
    async with aiohttp.ClientSession() as session:
        t = AiohttpTransport(session)
        await t.fetch(str(server.make_url("/route")) + "?point=1,2&point=3,4")
        assert not session.closed


def test_aiohttp_fetch():
    asyncio.run(with_server(_test_aiohttp_ok))


def test_aiohttp_non_2xx():
    asyncio.run(with_server(_test_aiohttp_status))


def test_aiohttp_keeps_caller_session_open():
    asyncio.run(with_server(_test_aiohttp_shared_session))


async def _test_aiohttp_undecodable(server, seen):
    with pytest.raises(TransportError) as exc:
        await AiohttpTransport().fetch(str(server.make_url("/latin")))
    assert "undecodable" in exc.value.message


async def _test_aiohttp_session_timeout(server, seen):
    async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=0.05)) as session:
        with pytest.raises(TransportError):
            await AiohttpTransport(session).fetch(str(server.make_url("/slow")))


def test_aiohttp_undecodable_body():
    asyncio.run(with_server(_test_aiohttp_undecodable))


def test_aiohttp_session_timeout():
    asyncio.run(with_server(_test_aiohttp_session_timeout))


async def _test_refused():
    with pytest.raises(TransportError):
        await AiohttpTransport().fetch("http://127.0.0.1:1/route")


def test_aiohttp_connection_refused():
    asyncio.run(_test_refused())


async def _test_end_to_end(server, seen, waypoints):
    gh = GraphHopperRouter(
        "secret",
        RouterOptions(service_url=str(server.make_url("/route")), url_parameters={"vehicle": "foot"}),
        AiohttpTransport(),
    )
    alts = await gh.route_async(waypoints, timeout_ms=5000)
    [query] = seen
    assert query.getall("point") == ["51.2562,7.1508", "51.2277,6.7735"]
    assert query["instructions"] == "true"
    assert query["type"] == "json"
    assert query["key"] == "secret"
    assert query["vehicle"] == "foot"
    return alts


def test_router_over_aiohttp(two_waypoints):
    alts = asyncio.run(with_server(lambda s, seen: _test_end_to_end(s, seen, two_waypoints)))
    assert len(alts) == 1
    assert alts[0].waypoint_indices == [0, 9]


class FakeResponse:
    def __init__(self, text):
        self.text = text

    def raise_for_status(self):
        pass


def test_requests_transport(monkeypatch):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        return FakeResponse('{"paths": []}')

    monkeypatch.setattr(transport_module.requests, "get", fake_get)
    body = asyncio.run(RequestsTransport(timeout=7).fetch("http://gh/route?point=1,2"))
    assert body == '{"paths": []}'
    assert calls == [("http://gh/route?point=1,2", 7)]


def test_requests_transport_http_error(monkeypatch):
    def fake_get(url, timeout):
        r = requests.Response()
        r.status_code = 401
        r.reason = "Unauthorized"
        return r

    monkeypatch.setattr(transport_module.requests, "get", fake_get)
    with pytest.raises(TransportError) as exc:
        RequestsTransport().get("http://gh/route")
    assert exc.value.message == "HTTP request failed: 401 Unauthorized"


def test_requests_transport_connection_error(monkeypatch):
    def fake_get(url, timeout):
        raise requests.ConnectionError("connection refused")

    monkeypatch.setattr(transport_module.requests, "get", fake_get)
    with pytest.raises(TransportError) as exc:
        asyncio.run(RequestsTransport().fetch("http://gh/route"))
    assert "connection refused" in exc.value.message
