import logging
from typing import Any, Dict, List, Sequence

from .InstructionConverter import convert_instructions
from .RouteBase import RouteAlternative, RouteResult, RouteSummary, Waypoint
from .WaypointMapper import map_waypoint_indices
from .errors import BackendError, ResponseFormatError
from .polyline_codec import decode

log = logging.getLogger(__name__)


def _number(path: Dict[str, Any], key: str) -> float:
    value = path.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ResponseFormatError(f"GraphHopper path '{key}' is not a number: {value!r}")
    return value


def check_backend_errors(response: Dict[str, Any]) -> None:
    """Raise BackendError for a populated info.errors envelope."""
    info = response.get("info") or {}
    if not isinstance(info, dict):
        raise ResponseFormatError(f"GraphHopper 'info' is not an object: {info!r}")
    errors = info.get("errors") or []
    if not isinstance(errors, list):
        raise ResponseFormatError(f"GraphHopper 'info.errors' is not a list: {errors!r}")
    if not errors:
        return
    # only the first error is surfaced, the rest are logged
    first = errors[0]
    for extra in errors[1:]:
        log.debug("GraphHopper additional error: %s", extra)
    if not isinstance(first, dict):
        raise BackendError(str(first), status=None)
    raise BackendError(first.get("message", "GraphHopper error"), status=first.get("details"))


def translate_path(path: Dict[str, Any], input_waypoints: Sequence[Waypoint]) -> RouteAlternative:
    if not isinstance(path, dict):
        raise ResponseFormatError(f"GraphHopper path is not an object: {path!r}")
    if "points" not in path:
        raise ResponseFormatError("GraphHopper path has no 'points'")
    distance = _number(path, "distance")
    time_ms = _number(path, "time")

    coordinates = decode(path["points"])
    instructions = convert_instructions(path.get("instructions"))
    count = len(coordinates)
    for ins in instructions:
        if not 0 <= ins.coordinate_index < count:
            raise ResponseFormatError(
                f"Instruction index {ins.coordinate_index} outside path of {count} points")

    mapped = map_waypoint_indices(input_waypoints, instructions, coordinates)

    return RouteAlternative(
        name="",
        coordinates=coordinates,
        instructions=instructions,
        summary=RouteSummary(
            total_distance_m=distance,
            total_time_s=time_ms / 1000,
        ),
        input_waypoints=list(input_waypoints),
        actual_waypoints=mapped.waypoints,
        waypoint_indices=mapped.indices,
    )


def translate_response(response: Dict[str, Any], input_waypoints: Sequence[Waypoint]) -> RouteResult:
    """
    Turn a parsed GraphHopper /route answer into route alternatives.
    Paths keep the order GraphHopper sent them in.
    """
    if not isinstance(response, dict):
        raise ResponseFormatError(f"Expected a JSON object, got {type(response).__name__}")

    check_backend_errors(response)

    paths = response.get("paths")
    if not isinstance(paths, list):
        raise ResponseFormatError(f"GraphHopper response has no 'paths' list: {paths!r}")

    alts: List[RouteAlternative] = [translate_path(path, input_waypoints) for path in paths]
    log.debug("translated %d GraphHopper paths", len(alts))
    return alts
