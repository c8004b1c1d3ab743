from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, Iterable, List, Optional, Set
from urllib.parse import urlencode

from .RouteBase import RouteResult, Waypoint
from .ResponseTranslator import translate_response
from .config import API_KEY, DEFAULT_TIMEOUT_MS, SERVICE_URL
from .errors import ResponseFormatError, RouteTimeoutError, RoutingError, TransportError
from .transport import AiohttpTransport

log = logging.getLogger(__name__)

RouteCallback = Callable[[Optional[RoutingError], Optional[RouteResult]], Any]


class RequestState(Enum):
    IDLE = auto()
    PENDING = auto()
    TIMED_OUT = auto()
    SETTLED = auto()


class CompletionLatch:
    """
    One-shot guard around a route callback.
    Whichever of timer / transport reaches fire() first wins, later calls are no-ops.
    """

    def __init__(self, callback: RouteCallback):
        self._callback = callback
        self.state = RequestState.IDLE

    def start(self) -> None:
        self.state = RequestState.PENDING

    @property
    def done(self) -> bool:
        return self.state in (RequestState.TIMED_OUT, RequestState.SETTLED)

    def fire(self, final_state: RequestState, error: Optional[RoutingError],
             result: Optional[RouteResult] = None) -> bool:
        if self.done:
            return False
        self.state = final_state
        self._callback(error, result)
        return True


@dataclass
class RouterOptions:
    service_url: str = SERVICE_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    url_parameters: Dict[str, Any] = field(default_factory=dict)


def _param_value(v: Any) -> Any:
    if isinstance(v, bool):
        return "true" if v else "false"
    return v


class GraphHopperRouter:
    """
    GraphHopper adapter / client

    - snapshots the caller's waypoints
    - issues one GET /route per call
    - races it against a timeout and reports exactly once through the callback
    """

    def __init__(self, api_key: Optional[str] = None,
                 options: Optional[RouterOptions] = None,
                 transport=None):
        self.api_key = api_key or API_KEY
        self.options = options or RouterOptions()
        self.transport = transport or AiohttpTransport()
        self._pending: Set[asyncio.Task] = set()

        if not self.api_key:
            raise ValueError("GraphHopper API key not set. Pass it or set GRAPHHOPPER_API_KEY in the .env file.")

    def build_route_url(self, waypoints: Iterable[Waypoint]) -> str:
        locs = [f"point={wp.lat_lng.lat},{wp.lat_lng.lng}" for wp in waypoints]
        base_url = self.options.service_url + "?" + "&".join(locs)

        # instructions are always needed, waypoint indices come from the via markers
        params = {
            "instructions": True,
            "type": "json",
            "key": self.api_key,
        }
        params.update(self.options.url_parameters)
        query = urlencode({k: _param_value(v) for k, v in params.items()}, doseq=True)
        return base_url + "&" + query

    def _masked(self, url: str) -> str:
        return url.replace(self.api_key, "***")

    def route(self, waypoints: Iterable[Any], callback: RouteCallback,
              timeout_ms: Optional[int] = None) -> asyncio.Task:
        """
        Start a routing request on the running event loop.
        callback(error, None) or callback(None, alternatives) is called once.
        """
        # value copies, the caller may keep mutating its own waypoints
        wps = [Waypoint.snapshot(wp) for wp in waypoints]
        if len(wps) < 2:
            raise ValueError("At least two waypoints are required to compute a route.")

        timeout_ms = self.options.timeout_ms if timeout_ms is None else timeout_ms
        url = self.build_route_url(wps)
        latch = CompletionLatch(callback)

        log.info("GraphHopper route request: %d waypoints, timeout %d ms", len(wps), timeout_ms)
        log.debug("GET %s", self._masked(url))

        task = asyncio.get_running_loop().create_task(self._run(url, wps, latch, timeout_ms))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def route_async(self, waypoints: Iterable[Any],
                          timeout_ms: Optional[int] = None) -> RouteResult:
        """Awaitable form of route(): returns the alternatives or raises the RoutingError."""
        done = asyncio.get_running_loop().create_future()

        def callback(error, result):
            if done.done():
                # awaiting caller went away
                return
            if error is not None:
                done.set_exception(error)
            else:
                done.set_result(result)

        self.route(waypoints, callback, timeout_ms)
        return await done

    def _time_out(self, latch: CompletionLatch, timeout_ms: int) -> None:
        if latch.fire(RequestState.TIMED_OUT, RouteTimeoutError()):
            log.warning("GraphHopper request timed out after %d ms", timeout_ms)

    async def _run(self, url: str, wps: List[Waypoint],
                   latch: CompletionLatch, timeout_ms: int) -> None:
        loop = asyncio.get_running_loop()
        latch.start()
        timer = loop.call_later(timeout_ms / 1000, self._time_out, latch, timeout_ms)

        try:
            body = await self.transport.fetch(url)
        except Exception as e:
            timer.cancel()
            error = e if isinstance(e, TransportError) else TransportError(f"{type(e).__name__}: {e}")
            if latch.done:
                log.debug("discarding transport failure after timeout: %s", error.message)
                return
            log.error("GraphHopper transport failure: %s", error.message)
            latch.fire(RequestState.SETTLED, error)
            return

        timer.cancel()
        if latch.done:
            log.debug("discarding GraphHopper response received after timeout")
            return

        try:
            data = json.loads(body)
        except (TypeError, ValueError) as e:
            latch.fire(RequestState.SETTLED, TransportError(f"invalid JSON body: {e}"))
            return

        try:
            alts = translate_response(data, wps)
        except RoutingError as e:
            log.error("GraphHopper route failed: %r", e)
            latch.fire(RequestState.SETTLED, e)
            return
        except Exception as e:
            # unexpected response shape, still reported through the callback
            log.exception("GraphHopper response could not be translated")
            latch.fire(RequestState.SETTLED, ResponseFormatError(f"unexpected GraphHopper response: {e!r}"))
            return

        latch.fire(RequestState.SETTLED, None, alts)


def graph_hopper(api_key: Optional[str] = None, transport=None, **options) -> GraphHopperRouter:
    return GraphHopperRouter(api_key, RouterOptions(**options), transport)
