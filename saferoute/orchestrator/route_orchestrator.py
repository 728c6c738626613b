"""Route orchestrator for coordinating the full safe-route pipeline."""
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence
import logging
from saferoute.config import get_settings
from saferoute.domain.geo_point import GeoPoint
from saferoute.domain.hazard import HazardZone
from saferoute.domain.route import ResolvedRoute
from saferoute.orchestrator.route_aggregator import aggregate_routes
from saferoute.planning.candidate_generator import generate_candidate_waypoints
from saferoute.routing.route_resolver import RouteResolver
from saferoute.validation.safety_checker import SafetyChecker

logger = logging.getLogger(__name__)


class RouteOrchestrator:
    """Orchestrates candidate generation, resolution, validation and aggregation."""

    def __init__(self, resolver: Optional[RouteResolver] = None,
                 checker: Optional[SafetyChecker] = None,
                 max_workers: Optional[int] = None):
        """Initialize orchestrator.

        Args:
            resolver: Route resolver (creates default one if None)
            checker: Safety checker (creates default one if None)
            max_workers: Concurrent backend requests; 1 resolves candidates
                one at a time (default from settings)
        """
        self.resolver = resolver or RouteResolver()
        self.checker = checker or SafetyChecker()
        if max_workers is None:
            max_workers = get_settings().max_workers
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None

    def compute_candidate_routes(self, start: Optional[GeoPoint], end: Optional[GeoPoint],
                                 hazards: Sequence[HazardZone] = (),
                                 sort_by: Optional[str] = None) -> List[ResolvedRoute]:
        """Compute the pool of alternative routes and label each safe or unsafe.

        Pipeline:
        1. Generate candidate via points
        2. Resolve routes through each candidate (failed candidates add nothing)
        3. Validate every route against all hazards
        4. Aggregate in candidate order and assign colors

        Args:
            start: Route start
            end: Route end
            hazards: Hazard zones to avoid
            sort_by: Optional "duration" or "distance" ordering

        Returns:
            All resolved routes, unsafe ones included; empty if none were found

        Raises:
            ValueError: if start or end is missing
        """
        if start is None or end is None:
            raise ValueError("Both start and end points are required")

        hazards = list(hazards)
        candidates = generate_candidate_waypoints(start, end, hazards)
        logger.info(f"Resolving routes through {len(candidates)} candidate via points "
                    f"({len(hazards)} hazard(s), {self.max_workers} worker(s))")

        route_groups = self._resolve_all(start, candidates, end)

        for group in route_groups:
            for route in group:
                self.checker.validate(route, hazards)

        routes = aggregate_routes(route_groups, sort_by=sort_by)
        safe_count = sum(1 for route in routes if route.is_safe)
        logger.info(f"Found {len(routes)} route(s), {safe_count} safe")
        return routes

    def _resolve_all(self, start: GeoPoint, candidates: List[GeoPoint],
                     end: GeoPoint) -> List[List[ResolvedRoute]]:
        """Resolve every candidate; the result is indexed by candidate order."""
        if self.max_workers == 1 or len(candidates) <= 1:
            return [self._resolve_one(start, candidate, end) for candidate in candidates]

        # Worker threads outlive a single request so their backend sessions are reused
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=self.max_workers,
                                                thread_name_prefix="route-resolver")
        futures = [
            self._executor.submit(self._resolve_one, start, candidate, end)
            for candidate in candidates
        ]
        return [future.result() for future in futures]

    def _resolve_one(self, start: GeoPoint, candidate: GeoPoint, end: GeoPoint) -> List[ResolvedRoute]:
        try:
            return self.resolver.resolve(start, candidate, end)
        except Exception as e:
            logger.error(f"Unexpected error resolving candidate ({candidate.lat:.5f}, {candidate.lng:.5f}): {e}")
            return []

    def close(self):
        """Stop the worker pool and close the resolver's backend connections."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
        close = getattr(self.resolver, "close", None)
        if close is not None:
            close()


def compute_candidate_routes(start: GeoPoint, end: GeoPoint,
                             hazards: Sequence[HazardZone] = ()) -> List[ResolvedRoute]:
    """Compute candidate routes with a default-configured orchestrator."""
    orchestrator = RouteOrchestrator()
    try:
        return orchestrator.compute_candidate_routes(start, end, hazards)
    finally:
        orchestrator.close()
