from typing import Any, Dict, Iterable, List, Optional

from .RouteBase import Instruction, ManeuverKind
from .errors import ResponseFormatError, UnknownManeuverError

# GraphHopper instruction sign -> portable maneuver
SIGN_TO_MANEUVER: Dict[int, ManeuverKind] = {
    -3: ManeuverKind.SHARP_LEFT,
    -2: ManeuverKind.LEFT,
    -1: ManeuverKind.SLIGHT_LEFT,
    0: ManeuverKind.STRAIGHT,
    1: ManeuverKind.SLIGHT_RIGHT,
    2: ManeuverKind.RIGHT,
    3: ManeuverKind.SHARP_RIGHT,
    4: ManeuverKind.DESTINATION_REACHED,
    5: ManeuverKind.WAYPOINT_REACHED,
    6: ManeuverKind.ROUNDABOUT,
}


def maneuver_for_sign(sign: Any) -> ManeuverKind:
    # bool is an int subclass, True must not pass as sign 1
    if isinstance(sign, bool) or not isinstance(sign, int):
        raise UnknownManeuverError(sign)
    try:
        return SIGN_TO_MANEUVER[sign]
    except KeyError:
        raise UnknownManeuverError(sign) from None


def convert_instructions(raw_instructions: Optional[Iterable[Dict[str, Any]]]) -> List[Instruction]:
    """
    Convert GraphHopper path.instructions into Instruction objects.
    time is milliseconds on the wire and seconds here; interval[0] becomes coordinate_index.
    """
    result: List[Instruction] = []
    for raw in raw_instructions or ():
        try:
            interval = raw["interval"]
            result.append(Instruction(
                maneuver=maneuver_for_sign(raw["sign"]),
                text=raw.get("text", ""),
                distance_m=raw.get("distance", 0.0),
                duration_s=raw.get("time", 0) / 1000,
                coordinate_index=int(interval[0]),
                exit_number=raw.get("exit_number"),
            ))
        except (AttributeError, KeyError, IndexError, TypeError) as e:
            raise ResponseFormatError(f"Malformed instruction {raw!r}: {e}") from e
    return result
