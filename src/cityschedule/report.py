"""Human-readable output for an Analysis: text sections and DataFrames."""
from typing import List

import pandas as pd

from .pipeline import Analysis
from .scc import has_cycle

RULE = '=' * 50


def _section(title: str) -> List[str]:
    return ['', RULE, title, RULE]


def components_frame(analysis: Analysis) -> pd.DataFrame:
    dag, g = analysis.condensation, analysis.graph
    rows = [{
        'component': c.id,
        'size': c.size,
        'weight': dag.weight(c.id),
        'cyclic': has_cycle(c, g),
        'tasks': ', '.join(c.task_ids),
        'successors': ', '.join(str(s) for s in dag.successors(c.id)),
    } for c in dag.components]
    return pd.DataFrame(rows, columns=['component', 'size', 'weight', 'cyclic', 'tasks', 'successors'])


def schedule_frame(analysis: Analysis) -> pd.DataFrame:
    """One row per component in topological order with CPM timings."""
    dag = analysis.condensation
    critical = set(analysis.critical_components())
    rows = []
    for cid in analysis.order:
        t = analysis.timing[cid]
        rows.append({'component': cid, 'tasks': ', '.join(dag.component(cid).task_ids),
                     'weight': dag.weight(cid), 'es': t.es, 'ef': t.ef, 'ls': t.ls, 'lf': t.lf,
                     'slack': t.slack, 'critical': cid in critical})
    return pd.DataFrame(rows, columns=['component', 'tasks', 'weight', 'es', 'ef', 'ls', 'lf', 'slack', 'critical'])


def format_report(analysis: Analysis) -> str:
    dag = analysis.condensation
    out: List[str] = []

    out += _section('STEP 1: STRONGLY CONNECTED COMPONENTS (Tarjan)')
    out.append(f'Total SCCs found: {len(analysis.components)}')
    out += [str(c) for c in analysis.components]

    out += _section('STEP 2: CONDENSATION GRAPH (DAG)')
    out.append(f'Number of components: {len(dag)}')
    for c in dag.components:
        out.append(f'Component {c.id} (size={c.size}, duration={dag.weight(c.id)}) -> {dag.successors(c.id)}')

    out += _section('STEP 3: TOPOLOGICAL ORDERING')
    out.append(f'Component Order: {analysis.order}')
    out.append('Derived Task Order:')
    out += [f'{i}. {tid}' for i, tid in enumerate(analysis.task_order, 1)]

    out += _section('STEP 4: PATH ANALYSIS ON DAG')
    cp = analysis.critical_path
    if cp.exists:
        out.append(f'Critical path length: {cp.length}')
        out.append(f'Path (component IDs): {cp.path}')
        for cid in cp.path:
            out.append(f'  Component {cid} (duration={dag.weight(cid)}): tasks={dag.component(cid).task_ids}')
    else:
        out.append('Critical path: no path (empty graph)')
    out.append(f'Project finish (forward pass): {analysis.project_finish}')

    if analysis.source is not None:
        out.append('')
        out.append(f'Shortest paths from component {analysis.source}:')
        for cid, d in analysis.distances.items():
            out.append(f'  Component {cid}: ' + ('unreachable' if d is None else f'distance = {d}'))
    if analysis.shortest is not None:
        sp = analysis.shortest
        out.append('')
        if sp.exists:
            out.append(f'Shortest path {analysis.source} -> {analysis.target}: {sp.path} (length {sp.length})')
        else:
            out.append(f'Shortest path {analysis.source} -> {analysis.target}: no path')

    out += _section('METRICS')
    for stage, snap in analysis.metrics.items():
        counters = ', '.join(f'{k}={v:,}' for k, v in sorted(snap.counters.items()))
        out.append(f'{stage}: {snap.elapsed_ms:.3f} ms  {counters}')
    return '\n'.join(out)
