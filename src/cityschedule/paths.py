"""Shortest and longest (critical) paths over the condensation.

All three queries are one dynamic-programming pass over a fixed topological
order: a component's distance is final before any of its successors is
visited, so every edge is relaxed at most once. Path length is the sum of the
weights of the components on the path, the first one included.
"""
import logging
from typing import Dict, List, Optional

from .errors import UnknownComponentError
from .metrics import Metrics
from .model import CondensationGraph, PathResult

logger = logging.getLogger(__name__)


def _check_component(dag: CondensationGraph, component_id: int):
    if component_id not in dag:
        raise UnknownComponentError(component_id)


def _walk_back(parent: Dict[int, int], end: int) -> List[int]:
    path = [end]
    while path[-1] in parent:
        path.append(parent[path[-1]])
    path.reverse()
    return path


def shortest_paths(dag: CondensationGraph, order: List[int], source: int,
                   metrics: Optional[Metrics] = None,
                   parents: Optional[Dict[int, int]] = None) -> Dict[int, Optional[int]]:
    """Distance from ``source`` to every component, ``None`` when unreachable.

    When ``parents`` is given it is filled with the predecessor of every
    reached component other than the source.
    """
    metrics = metrics if metrics is not None else Metrics()
    metrics.reset()
    metrics.start_timer()
    if not len(dag):
        metrics.stop_timer()
        return {}
    _check_component(dag, source)
    if parents is None:
        parents = {}
    parents.clear()

    dist: Dict[int, Optional[int]] = {c.id: None for c in dag.components}
    dist[source] = dag.weight(source)
    for u in order:
        metrics.increment('vertices_processed')
        if dist[u] is None:
            continue
        for v in dag.successors(u):
            metrics.increment('edges_examined')
            metrics.increment('relaxations')
            candidate = dist[u] + dag.weight(v)
            if dist[v] is None or candidate < dist[v]:
                dist[v] = candidate
                parents[v] = u
                metrics.increment('distance_updates')
    metrics.stop_timer()
    return dist


def shortest_path(dag: CondensationGraph, order: List[int], source: int, target: int,
                  metrics: Optional[Metrics] = None) -> PathResult:
    """Cheapest path from ``source`` to ``target``.

    The walk starts relaxing once it reaches ``source`` and stops at
    ``target``, whose distance is final at that point.
    """
    metrics = metrics if metrics is not None else Metrics()
    metrics.reset()
    metrics.start_timer()
    if not len(dag):
        metrics.stop_timer()
        return PathResult.none()
    _check_component(dag, source)
    _check_component(dag, target)

    dist: Dict[int, Optional[int]] = {c.id: None for c in dag.components}
    parent: Dict[int, int] = {}
    dist[source] = dag.weight(source)
    started = False
    for u in order:
        if u == source:
            started = True
        if not started or dist[u] is None:
            continue
        metrics.increment('vertices_processed')
        if u == target:
            break
        for v in dag.successors(u):
            metrics.increment('edges_examined')
            metrics.increment('relaxations')
            candidate = dist[u] + dag.weight(v)
            if dist[v] is None or candidate < dist[v]:
                dist[v] = candidate
                parent[v] = u
                metrics.increment('distance_updates')
    metrics.stop_timer()

    if dist[target] is None:
        logger.debug("No path from component %d to %d", source, target)
        return PathResult.none()
    return PathResult(path=_walk_back(parent, target), length=dist[target])


def longest_path(dag: CondensationGraph, order: List[int],
                 metrics: Optional[Metrics] = None) -> PathResult:
    """Critical path: the heaviest chain of components through the DAG.

    Ties between equally heavy end components go to the lowest component id.
    """
    metrics = metrics if metrics is not None else Metrics()
    metrics.reset()
    metrics.start_timer()
    if not len(dag):
        metrics.stop_timer()
        return PathResult.none()

    start = {c.id: 0 for c in dag.components}
    parent: Dict[int, int] = {}
    for u in order:
        metrics.increment('vertices_processed')
        finish = start[u] + dag.weight(u)
        for v in dag.successors(u):
            metrics.increment('edges_examined')
            metrics.increment('relaxations')
            if finish > start[v]:
                start[v] = finish
                parent[v] = u
                metrics.increment('distance_updates')

    end, best = None, None
    for c in dag.components:
        finish = start[c.id] + dag.weight(c.id)
        if best is None or finish > best:
            end, best = c.id, finish
    metrics.stop_timer()
    return PathResult(path=_walk_back(parent, end), length=best)
