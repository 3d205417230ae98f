from .pipeline import Analysis
from .scc import has_cycle
def compute_kpis(analysis: Analysis):
    g, dag = analysis.graph, analysis.condensation
    cyclic = [c for c in analysis.components if has_cycle(c, g)]
    cp = analysis.critical_path
    return {
        'tasks': len(g),
        'edges': g.edge_count(),
        'components': len(dag),
        'cyclic_components': len(cyclic),
        'largest_component': max((c.size for c in analysis.components), default=0),
        'condensation_edges': dag.edge_count(),
        'critical_path_length': cp.length if cp.exists else 0,
        'critical_path': cp.path,
        'critical_tasks': analysis.critical_tasks(),
        'task_order': analysis.task_order,
        'stage_ms': {k: round(v.elapsed_ms, 3) for k, v in analysis.metrics.items()},
    }
