import asyncio
import logging

from ghrouter import LatLng, RoutingError, Waypoint, graph_hopper

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

# Coordinates: (lat, lon)
start = (51.2562, 7.1508)       # Wuppertal
via = (51.2402, 6.9734)         # Mettmann
end = (51.2277, 6.7735)         # Düsseldorf


async def run():
    # key comes from GRAPHHOPPER_API_KEY in .env
    router = graph_hopper(url_parameters={"vehicle": "car", "locale": "de"})
    waypoints = [
        Waypoint(LatLng(*start), "Wuppertal"),
        Waypoint(LatLng(*via), "Mettmann"),
        Waypoint(LatLng(*end), "Düsseldorf"),
    ]
    try:
        alts = await router.route_async(waypoints, timeout_ms=10 * 1000)
    except RoutingError as e:
        print("Routing failed:", e.status, e.message)
        return

    for i, alt in enumerate(alts):
        print(f"Alternative {i}: {alt.summary.total_distance_m / 1000:.1f} km, "
              f"{alt.summary.total_time_s / 60:.0f} min, {len(alt.coordinates)} points")
        for wp, idx in zip(alt.actual_waypoints, alt.waypoint_indices):
            print(f"  {wp.name:<12} @ {idx:>5}  ({wp.lat_lng.lat:.5f}, {wp.lat_lng.lng:.5f})")
        for ins in alt.instructions:
            print(f"  [{ins.maneuver.value:<18}] {ins.text} ({ins.distance_m:.0f} m)")


if __name__ == "__main__":
    asyncio.run(run())
