#Public API of the GraphHopper route translation layer.

from .RouteBase import (
    Instruction,
    LatLng,
    ManeuverKind,
    RouteAlternative,
    RouteResult,
    RouteSummary,
    Waypoint,
)
from .errors import (
    BackendError,
    DecodeError,
    ResponseFormatError,
    RouteTimeoutError,
    RoutingError,
    TransportError,
    UnknownManeuverError,
    WaypointMismatchError,
)
from .polyline_codec import decode, encode
from .InstructionConverter import convert_instructions
from .WaypointMapper import map_waypoint_indices
from .ResponseTranslator import translate_response
from .RequestCoordinator import GraphHopperRouter, RouterOptions, graph_hopper
from .transport import AiohttpTransport, RequestsTransport

__all__ = [
    "AiohttpTransport",
    "BackendError",
    "DecodeError",
    "GraphHopperRouter",
    "Instruction",
    "LatLng",
    "ManeuverKind",
    "RequestsTransport",
    "ResponseFormatError",
    "RouteAlternative",
    "RouteResult",
    "RouteSummary",
    "RouteTimeoutError",
    "RouterOptions",
    "RoutingError",
    "TransportError",
    "UnknownManeuverError",
    "Waypoint",
    "WaypointMismatchError",
    "convert_instructions",
    "decode",
    "encode",
    "graph_hopper",
    "map_waypoint_indices",
    "translate_response",
]
