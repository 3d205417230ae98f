import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .condensation import build_condensation
from .errors import UnknownTaskError
from .metrics import Metrics, MetricsSnapshot
from .model import Component, CondensationGraph, PathResult, TaskGraph
from .paths import longest_path, shortest_path, shortest_paths
from .scc import component_map, find_sccs
from .schedule import ComponentTiming, backward_pass, critical_components, forward_pass, task_order, topo_order

logger = logging.getLogger(__name__)


@dataclass
class Analysis:
    """Everything one pipeline run produces, as plain data."""
    graph: TaskGraph
    components: List[Component]
    task_to_component: Dict[str, int]
    condensation: CondensationGraph
    order: List[int]
    task_order: List[str]
    critical_path: PathResult
    timing: Dict[int, ComponentTiming]
    project_finish: int
    source: Optional[int] = None
    distances: Dict[int, Optional[int]] = field(default_factory=dict)
    target: Optional[int] = None
    shortest: Optional[PathResult] = None
    metrics: Dict[str, MetricsSnapshot] = field(default_factory=dict)

    def critical_tasks(self) -> List[str]:
        return [tid for cid in self.critical_path.path for tid in self.condensation.component(cid).task_ids]

    def critical_components(self) -> List[int]:
        return critical_components(self.order, self.timing)

    def component_of(self, task_id: str) -> int:
        try:
            return self.task_to_component[task_id]
        except KeyError:
            raise UnknownTaskError(task_id) from None


def run_analysis(graph: TaskGraph, source: Optional[str] = None,
                 target: Optional[str] = None) -> Analysis:
    """Run SCC detection, condensation, ordering and path analysis once.

    ``source`` and ``target`` are task ids; the queries run on the
    components that contain them. Without a source the first component in
    topological order is used as the source for both queries.
    """
    for tid in (source, target):
        if tid is not None and tid not in graph:
            raise UnknownTaskError(tid)
    m = Metrics()
    snaps: Dict[str, MetricsSnapshot] = {}

    components = find_sccs(graph, m)
    snaps['scc'] = m.snapshot()
    mapping = component_map(components)
    dag = build_condensation(graph, components, mapping, m)
    snaps['condensation'] = m.snapshot()
    order = topo_order(dag, m)
    snaps['topo'] = m.snapshot()
    flat = task_order(dag, order)

    critical = longest_path(dag, order, m)
    snaps['critical_path'] = m.snapshot()
    timing = forward_pass(dag, order)
    finish = backward_pass(dag, order, timing)

    analysis = Analysis(graph=graph, components=components, task_to_component=mapping,
                        condensation=dag, order=order, task_order=flat,
                        critical_path=critical, timing=timing, project_finish=finish, metrics=snaps)
    if components:
        analysis.source = mapping[source] if source is not None else order[0]
        analysis.distances = shortest_paths(dag, order, analysis.source, m)
        snaps['shortest_paths'] = m.snapshot()
        if target is not None:
            analysis.target = mapping[target]
            analysis.shortest = shortest_path(dag, order, analysis.source, analysis.target, m)
            snaps['shortest_path'] = m.snapshot()
    logger.info("Analyzed %d tasks: %d components, critical path length %d",
                len(graph), len(components), max(critical.length, 0))
    return analysis
