from math import atan2, cos, radians, sin, sqrt
from typing import Any, Dict, List, Optional

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometers between two points in decimal degrees."""
    d_lat = radians(lat2 - lat1)
    d_lng = radians(lng2 - lng1)

    a = sin(d_lat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(
        d_lng / 2
    ) ** 2
    # rounding can push `a` a hair past 1 for near-antipodal points
    a = min(a, 1.0)
    c = 2 * atan2(sqrt(a), sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def annotate_by_distance(
    restaurants: List[Dict[str, Any]],
    lat: float,
    lng: float,
    radius_km: Optional[float] = None,
) -> List[Dict[str, Any]]:
    """
    Attach `distance` (km) to each restaurant and return the ones within
    `radius_km`, nearest first.

    Restaurants without coordinates are dropped. The sort is stable, so
    equal distances keep their incoming order.
    """
    nearby = []
    for restaurant in restaurants:
        r_lat = restaurant.get("latitude")
        r_lng = restaurant.get("longitude")
        if r_lat is None or r_lng is None:
            continue

        distance = haversine_km(lat, lng, r_lat, r_lng)
        if radius_km is not None and distance > radius_km:
            continue

        nearby.append({**restaurant, "distance": distance})

    nearby.sort(key=lambda r: r["distance"])
    return nearby
