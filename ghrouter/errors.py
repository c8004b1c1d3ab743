from typing import Any


class RoutingError(Exception):
    """Base error handed to route callbacks. Carries the {status, message} pair."""

    def __init__(self, message: str, status: Any = -1):
        super().__init__(message)
        self.status = status
        self.message = message

    def __repr__(self):
        return f"{type(self).__name__}(status={self.status!r}, message={self.message!r})"


class RouteTimeoutError(RoutingError):
    def __init__(self, message: str = "GraphHopper request timed out."):
        super().__init__(message, status=-1)


class TransportError(RoutingError):
    def __init__(self, detail: Any):
        super().__init__(f"HTTP request failed: {detail}", status=-1)
        self.detail = detail


class BackendError(RoutingError):
    """GraphHopper answered with a populated info.errors envelope."""
    pass


class DecodeError(RoutingError):
    pass


class UnknownManeuverError(RoutingError):
    def __init__(self, sign: Any):
        super().__init__(f"Unknown maneuver sign: {sign!r}")
        self.sign = sign


class WaypointMismatchError(RoutingError):
    pass


class ResponseFormatError(RoutingError):
    pass
