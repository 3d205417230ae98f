"""Strongly connected components (Tarjan's algorithm).

The depth-first search runs on an explicit frame stack instead of the
interpreter stack, so long dependency chains do not hit the recursion
limit. Visit order and the discovery/low-link rules are the same as in the
recursive formulation: tasks are started in insertion order and each task's
outgoing edges are followed in edge-insertion order, so component ids are
reproducible for identical input.
"""
import logging
from typing import Dict, List, Optional, Set

from .metrics import Metrics
from .model import Component, TaskGraph

logger = logging.getLogger(__name__)


def find_sccs(graph: TaskGraph, metrics: Optional[Metrics] = None) -> List[Component]:
    """Return the SCCs of ``graph`` with ids assigned in closure order."""
    metrics = metrics if metrics is not None else Metrics()
    metrics.reset()
    metrics.start_timer()

    discovery: Dict[str, int] = {}
    low: Dict[str, int] = {}
    on_stack: Set[str] = set()
    stack: List[str] = []
    components: List[Component] = []

    def discover(task_id):
        metrics.increment('dfs_calls')
        metrics.increment('vertices_visited')
        discovery[task_id] = low[task_id] = len(discovery)
        stack.append(task_id)
        on_stack.add(task_id)
        metrics.increment('stack_operations')

    for start in graph.tasks:
        if start in discovery:
            continue
        discover(start)
        # each frame is [task id, index of the next outgoing edge to follow]
        frames = [[start, 0]]
        while frames:
            frame = frames[-1]
            u, pos = frame
            neighbours = graph.adjacency[u]
            if pos < len(neighbours):
                frame[1] = pos + 1
                v = neighbours[pos]
                metrics.increment('edges_explored')
                if v not in discovery:
                    discover(v)
                    frames.append([v, 0])
                elif v in on_stack:
                    low[u] = min(low[u], discovery[v])
                continue

            frames.pop()
            if low[u] == discovery[u]:
                component = Component(id=len(components))
                while True:
                    w = stack.pop()
                    on_stack.discard(w)
                    metrics.increment('stack_operations')
                    component.task_ids.append(w)
                    if w == u:
                        break
                components.append(component)
            if frames:
                parent = frames[-1][0]
                low[parent] = min(low[parent], low[u])

    metrics.stop_timer()
    logger.debug("Found %d SCCs over %d tasks in %.3f ms",
                 len(components), len(graph), metrics.elapsed_ms)
    return components


def component_map(components: List[Component]) -> Dict[str, int]:
    """Map every task id to the id of the component that contains it."""
    return {tid: c.id for c in components for tid in c.task_ids}


def has_cycle(component: Component, graph: TaskGraph) -> bool:
    """True for multi-task components and for a single task with a self-loop."""
    if component.size > 1:
        return True
    tid = component.task_ids[0]
    return tid in graph.adjacency[tid]
