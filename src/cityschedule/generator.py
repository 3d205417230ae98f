"""Synthetic task datasets of different sizes, densities and cycle structure.

Nine standard datasets are produced: three small (6-10 tasks), three
medium (10-20) and three large (20-50). DAG datasets only add edges from a
lower to a higher task index; cyclic datasets add a few back edges on top.
"""
import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from .data_loader import save_tasks
from .model import Task, TaskGraph
from .scc import find_sccs, has_cycle

logger = logging.getLogger(__name__)

TASK_TYPES = [
    'Street Cleaning', 'Traffic Light Repair', 'Camera Installation',
    'Sensor Calibration', 'Network Config', 'Data Analytics',
    'System Test', 'Bug Fixes', 'Security Audit', 'Performance Tuning',
    'Database Migration', 'UI Update', 'API Integration', 'Load Testing',
    'Documentation', 'Code Review', 'Deployment', 'Monitoring Setup',
]


@dataclass(frozen=True)
class DatasetSpec:
    filename: str
    num_nodes: int
    density: float
    allow_cycles: bool
    description: str


DATASETS = [
    DatasetSpec('small_dag_sparse.json', 6, 0.3, False, 'Small sparse DAG'),
    DatasetSpec('small_cyclic_medium.json', 8, 0.4, True, 'Small graph with 1-2 cycles'),
    DatasetSpec('small_dag_dense.json', 10, 0.5, False, 'Small dense DAG'),
    DatasetSpec('medium_mixed_sparse.json', 12, 0.25, True, 'Medium sparse with multiple SCCs'),
    DatasetSpec('medium_dag.json', 15, 0.35, False, 'Medium DAG'),
    DatasetSpec('medium_cyclic_dense.json', 18, 0.45, True, 'Medium dense with several cycles'),
    DatasetSpec('large_sparse_dag.json', 25, 0.15, False, 'Large sparse DAG for performance testing'),
    DatasetSpec('large_mixed.json', 35, 0.25, True, 'Large mixed structure with multiple SCCs'),
    DatasetSpec('large_dense.json', 45, 0.30, False, 'Large dense DAG for timing tests'),
]


def _forward_edges(n: int, limit: int, prob: float, rng: random.Random,
                   edges: Set[Tuple[int, int]]):
    for i in range(n):
        for j in range(i + 1, n):
            if len(edges) >= limit:
                return
            if rng.random() < prob:
                edges.add((i, j))


def generate_tasks(num_nodes: int, density: float, allow_cycles: bool,
                   rng: Optional[random.Random] = None) -> List[Task]:
    rng = rng or random.Random(42)
    target = int(num_nodes * (num_nodes - 1) // 2 * density)
    edges: Set[Tuple[int, int]] = set()
    if allow_cycles:
        _forward_edges(num_nodes, target * 2 // 3, 0.3, rng, edges)
        for _ in range(1 + rng.randrange(3)):
            if len(edges) >= target or num_nodes < 2:
                break
            i = rng.randrange(1, num_nodes)
            j = rng.randrange(i)
            edges.add((i, j))
    else:
        _forward_edges(num_nodes, target, 0.4, rng, edges)

    deps: Dict[int, List[str]] = {i: [] for i in range(num_nodes)}
    for src, dst in sorted(edges):
        deps[dst].append(f'T{src + 1}')
    tasks = []
    for i in range(num_nodes):
        name = f'{TASK_TYPES[i % len(TASK_TYPES)]} #{i // len(TASK_TYPES) + 1}'
        tasks.append(Task(id=f'T{i + 1}', name=name, duration=rng.randint(2, 9), dependencies=deps[i]))
    return tasks


def contains_cycle(tasks: List[Task]) -> bool:
    """True when the dependencies close at least one cycle."""
    g = TaskGraph.from_tasks(tasks)
    return any(has_cycle(c, g) for c in find_sccs(g))


def generate_all_datasets(output_dir, seed: int = 42) -> List[Dict]:
    """Write the nine standard datasets and return one stats row per file."""
    out = Path(output_dir)
    rng = random.Random(seed)
    stats = []
    for spec in DATASETS:
        tasks = generate_tasks(spec.num_nodes, spec.density, spec.allow_cycles, rng)
        save_tasks(tasks, out / spec.filename)
        row = {'file': spec.filename, 'description': spec.description,
               'vertices': len(tasks), 'edges': sum(len(t.dependencies) for t in tasks),
               'density': spec.density, 'allow_cycles': spec.allow_cycles,
               'cyclic': contains_cycle(tasks)}
        logger.info("Generated %s: %d vertices, %d edges", spec.filename, row['vertices'], row['edges'])
        stats.append(row)
    return stats
