"""Merges resolved routes into the final colored result list."""
from typing import Iterable, List, Optional
from saferoute.domain.route import ResolvedRoute

# One distinct color per route position, cycled
ROUTE_COLORS = (
    "#FF5733",  # red-orange
    "#33FF57",  # lime green
    "#3357FF",  # blue
    "#F1C40F",  # yellow
    "#9B59B6",  # purple
    "#E67E22",  # orange
    "#1ABC9C",  # teal
    "#E74C3C",  # red
    "#2ECC71",  # green
    "#3498DB",  # light blue
)

SORT_KEYS = {
    "duration": lambda route: route.duration_seconds,
    "distance": lambda route: route.distance_meters,
}


def aggregate_routes(route_groups: Iterable[Iterable[ResolvedRoute]],
                     sort_by: Optional[str] = None) -> List[ResolvedRoute]:
    """Flatten per-candidate route lists and assign colors by position.

    Unsafe routes are kept. Order is candidate order, then alternative
    order, unless sort_by is "duration" or "distance" (routes missing the
    metric go last).
    """
    routes = [route for group in route_groups for route in group]

    if sort_by is not None:
        if sort_by not in SORT_KEYS:
            raise ValueError(f"Unknown sort key: {sort_by}. Use one of {sorted(SORT_KEYS)}")
        key = SORT_KEYS[sort_by]
        routes.sort(key=lambda route: (key(route) is None, key(route) or 0.0))

    for index, route in enumerate(routes):
        route.color = ROUTE_COLORS[index % len(ROUTE_COLORS)]

    return routes
