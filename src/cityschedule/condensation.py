import logging
from typing import Dict, List, Optional, Set, Tuple

from .errors import MalformedGraphError
from .metrics import Metrics
from .model import Component, CondensationGraph, TaskGraph

logger = logging.getLogger(__name__)


def _lookup(task_to_component: Dict[str, int], task_id: str) -> int:
    try:
        return task_to_component[task_id]
    except KeyError:
        raise MalformedGraphError(f"Task {task_id} is not assigned to any component") from None


def build_condensation(graph: TaskGraph, components: List[Component],
                       task_to_component: Dict[str, int],
                       metrics: Optional[Metrics] = None) -> CondensationGraph:
    """Collapse each SCC into one node of an acyclic graph.

    Cross-component edges are kept once per ordered component pair, in the
    order they are first met; edges inside a component are dropped. A
    component weighs as much as its longest member task.
    """
    metrics = metrics if metrics is not None else Metrics()
    metrics.reset()
    metrics.start_timer()

    adjacency: Dict[int, List[int]] = {c.id: [] for c in components}
    seen: Set[Tuple[int, int]] = set()
    for src, dst in graph.edges():
        metrics.increment('edges_examined')
        a, b = _lookup(task_to_component, src), _lookup(task_to_component, dst)
        if a == b:
            continue
        if (a, b) not in seen:
            seen.add((a, b))
            adjacency[a].append(b)
            metrics.increment('edges_added')

    weights: Dict[int, int] = {}
    for c in components:
        for tid in c.task_ids:
            if tid not in graph:
                raise MalformedGraphError(f"Component {c.id} lists unknown task {tid}")
        weights[c.id] = max((graph.task(tid).duration for tid in c.task_ids), default=0)

    metrics.stop_timer()
    logger.debug("Condensation: %d components, %d edges", len(components), len(seen))
    return CondensationGraph(components=components, adjacency=adjacency, weights=weights)
