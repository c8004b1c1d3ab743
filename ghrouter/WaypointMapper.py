from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from .RouteBase import Instruction, LatLng, ManeuverKind, Waypoint
from .errors import ResponseFormatError, WaypointMismatchError


@dataclass(frozen=True)
class MappedWaypoints:
    waypoints: List[Waypoint]
    indices: List[int]


def map_waypoint_indices(input_waypoints: Sequence[Waypoint],
                         instructions: Sequence[Instruction],
                         coordinates: Sequence[LatLng]) -> MappedWaypoints:
    """
    Find where the input waypoints sit on the decoded path.

    First and last waypoint are pinned to the first and last coordinate.
    The n-th WaypointReached instruction is the n-th intermediate input waypoint.
    """
    if len(input_waypoints) < 2:
        raise WaypointMismatchError(
            f"At least two input waypoints are required, got {len(input_waypoints)}")
    if len(coordinates) < 2:
        raise ResponseFormatError(
            f"Path needs at least two coordinates, got {len(coordinates)}")

    last = len(coordinates) - 1
    vias = input_waypoints[1:-1]
    reached = [ins for ins in instructions if ins.maneuver is ManeuverKind.WAYPOINT_REACHED]
    if len(reached) != len(vias):
        raise WaypointMismatchError(
            f"Backend reported {len(reached)} via points for {len(vias)} intermediate waypoints")

    indices = [0]
    waypoints = [Waypoint(coordinates[0], input_waypoints[0].name, input_waypoints[0].options)]

    for via, ins in zip(vias, reached):
        idx = ins.coordinate_index
        if not 0 <= idx <= last:
            raise ResponseFormatError(f"Via index {idx} outside path of {len(coordinates)} points")
        if idx <= indices[-1] or idx >= last:
            raise WaypointMismatchError(f"Via index {idx} breaks waypoint order {indices}")
        indices.append(idx)
        waypoints.append(Waypoint(coordinates[idx], via.name, via.options))

    indices.append(last)
    waypoints.append(Waypoint(coordinates[last], input_waypoints[-1].name, input_waypoints[-1].options))

    return MappedWaypoints(waypoints=waypoints, indices=indices)
