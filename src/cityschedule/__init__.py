"""Cyclic task-dependency analysis: SCCs, condensation, ordering and critical paths."""
from .errors import (CycleError, DatasetError, MalformedGraphError, ScheduleError,
                     UnknownComponentError, UnknownTaskError)
from .metrics import Metrics, MetricsSnapshot
from .model import Component, CondensationGraph, PathResult, Task, TaskGraph
from .scc import component_map, find_sccs
from .condensation import build_condensation
from .schedule import task_order, topo_order
from .paths import longest_path, shortest_path, shortest_paths
from .pipeline import Analysis, run_analysis

__version__ = '0.1.0'

__all__ = [
    'Analysis', 'Component', 'CondensationGraph', 'CycleError', 'DatasetError',
    'MalformedGraphError', 'Metrics', 'MetricsSnapshot', 'PathResult', 'ScheduleError',
    'Task', 'TaskGraph', 'UnknownComponentError', 'UnknownTaskError',
    'build_condensation', 'component_map', 'find_sccs', 'longest_path', 'run_analysis',
    'shortest_path', 'shortest_paths', 'task_order', 'topo_order',
]
