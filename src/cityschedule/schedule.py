import logging
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Optional

from .errors import CycleError
from .metrics import Metrics
from .model import CondensationGraph

logger = logging.getLogger(__name__)


def topo_order(dag: CondensationGraph, metrics: Optional[Metrics] = None) -> List[int]:
    """Kahn's elimination over the condensation.

    The queue is seeded in component-id order, which fixes the order among
    components that have no constraint between them. Raises CycleError if
    any component is never released.
    """
    metrics = metrics if metrics is not None else Metrics()
    metrics.reset()
    metrics.start_timer()
    indeg = {c.id: 0 for c in dag.components}
    for c in dag.components:
        for v in dag.successors(c.id):
            indeg[v] += 1
            metrics.increment('in_degree_calculations')
    q = deque()
    for c in dag.components:
        if indeg[c.id] == 0:
            q.append(c.id)
            metrics.increment('queue_pushes')
    order: List[int] = []
    while q:
        n = q.popleft()
        metrics.increment('queue_pops')
        metrics.increment('vertices_processed')
        order.append(n)
        for v in dag.successors(n):
            indeg[v] -= 1
            metrics.increment('in_degree_updates')
            if indeg[v] == 0:
                q.append(v)
                metrics.increment('queue_pushes')
    metrics.stop_timer()
    if len(order) != len(dag):
        stuck = sorted(k for k, v in indeg.items() if v > 0)
        logger.error("Cycle detected in condensation graph among components %s", stuck)
        raise CycleError(f"condensation graph has a cycle among components {stuck}")
    return order


def task_order(dag: CondensationGraph, order: List[int]) -> List[str]:
    """Expand a component order into a flat task order.

    Tasks inside one component keep the order stored on the component; their
    relative order carries no dependency guarantee.
    """
    return [tid for cid in order for tid in dag.component(cid).task_ids]


@dataclass
class ComponentTiming:
    es: int = 0
    ef: int = 0
    ls: int = 0
    lf: int = 0
    slack: int = 0


def forward_pass(dag: CondensationGraph, order: List[int]) -> Dict[int, ComponentTiming]:
    preds: Dict[int, List[int]] = {cid: [] for cid in order}
    for u in order:
        for v in dag.successors(u):
            preds[v].append(u)
    timing: Dict[int, ComponentTiming] = {}
    for cid in order:
        t = timing[cid] = ComponentTiming()
        t.es = max((timing[p].ef for p in preds[cid]), default=0)
        t.ef = t.es + dag.weight(cid)
    return timing


def backward_pass(dag: CondensationGraph, order: List[int], timing: Dict[int, ComponentTiming]) -> int:
    """Fill latest start/finish and slack; return the project finish."""
    project_finish = max((timing[cid].ef for cid in order), default=0)
    for cid in reversed(order):
        t = timing[cid]
        succ = dag.successors(cid)
        t.lf = project_finish if not succ else min(timing[s].ls for s in succ)
        t.ls = t.lf - dag.weight(cid)
        t.slack = t.ls - t.es
    return project_finish


def critical_components(order: List[int], timing: Dict[int, ComponentTiming]) -> List[int]:
    return [cid for cid in order if timing[cid].slack == 0]
