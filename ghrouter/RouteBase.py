from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

LatLon = Tuple[float, float]


@dataclass(frozen=True)
class LatLng:
    lat: float
    lng: float

    @classmethod
    def of(cls, value: Union["LatLng", LatLon, Dict[str, float]]) -> "LatLng":
        if isinstance(value, LatLng):
            return cls(float(value.lat), float(value.lng))
        if isinstance(value, dict):
            return cls(float(value["lat"]), float(value["lng"]))
        lat, lng = value
        return cls(float(lat), float(lng))

    def as_tuple(self) -> LatLon:
        return self.lat, self.lng


@dataclass(frozen=True)
class Waypoint:
    lat_lng: LatLng
    name: str = ""
    options: Any = field(default_factory=dict)

    @classmethod
    def snapshot(cls, wp: Any) -> "Waypoint":
        """
        Value copy of a caller-owned waypoint.
        Accepts anything with lat_lng/name/options attributes, a mapping with those keys,
        or a bare (lat, lng).
        """
        if isinstance(wp, dict) and "lat_lng" in wp:
            lat_lng, name, options = wp["lat_lng"], wp.get("name"), wp.get("options")
        elif hasattr(wp, "lat_lng"):
            lat_lng, name, options = wp.lat_lng, getattr(wp, "name", ""), getattr(wp, "options", None)
        else:
            lat_lng, name, options = wp, "", None
        try:
            position = LatLng.of(lat_lng)
        except (KeyError, TypeError, ValueError) as e:
            raise ValueError(f"Not a waypoint position: {lat_lng!r}") from e
        return cls(
            lat_lng=position,
            name=name or "",
            options=copy.deepcopy(options) if options is not None else {},
        )


class ManeuverKind(Enum):
    SHARP_LEFT = "SharpLeft"
    LEFT = "Left"
    SLIGHT_LEFT = "SlightLeft"
    STRAIGHT = "Straight"
    SLIGHT_RIGHT = "SlightRight"
    RIGHT = "Right"
    SHARP_RIGHT = "SharpRight"
    DESTINATION_REACHED = "DestinationReached"
    WAYPOINT_REACHED = "WaypointReached"
    ROUNDABOUT = "Roundabout"


@dataclass(frozen=True)
class Instruction:
    maneuver: ManeuverKind
    text: str
    distance_m: float
    duration_s: float
    coordinate_index: int
    exit_number: Optional[int] = None


@dataclass(frozen=True)
class RouteSummary:
    total_distance_m: float
    total_time_s: float


@dataclass(frozen=True)
class RouteAlternative:
    """
    One path of a GraphHopper answer, normalized for map code.
    coordinates: decoded polyline points
    instructions: turn-by-turn steps, coordinate_index points into coordinates
    actual_waypoints / waypoint_indices: where each input waypoint landed on the path
    """
    coordinates: List[LatLng]
    instructions: List[Instruction]
    summary: RouteSummary
    input_waypoints: List[Waypoint]
    actual_waypoints: List[Waypoint]
    waypoint_indices: List[int]
    name: str = ""


RouteResult = List[RouteAlternative]
