import pytest

from cityschedule.data_loader import sample_tasks
from cityschedule.model import Task, TaskGraph


def make_graph(durations, edges):
    """Build a TaskGraph from {id: duration} and (prerequisite, dependent) pairs."""
    deps = {tid: [] for tid in durations}
    for src, dst in edges:
        deps[dst].append(src)
    return TaskGraph.from_tasks(Task(id=tid, name=f'Task {tid}', duration=d, dependencies=deps[tid])
                                for tid, d in durations.items())


@pytest.fixture
def chain_graph():
    return make_graph({'T1': 5, 'T2': 3, 'T3': 4, 'T4': 2},
                      [('T1', 'T2'), ('T2', 'T3'), ('T3', 'T4')])


@pytest.fixture
def cycle_graph():
    return make_graph({'T1': 5, 'T2': 3, 'T3': 4},
                      [('T1', 'T2'), ('T2', 'T3'), ('T3', 'T1')])


@pytest.fixture
def two_cycles_graph():
    return make_graph({'T1': 1, 'T2': 2, 'T3': 3, 'T4': 4},
                      [('T1', 'T2'), ('T2', 'T1'), ('T3', 'T4'), ('T4', 'T3')])


@pytest.fixture
def diamond_graph():
    return make_graph({'T1': 5, 'T2': 3, 'T3': 4, 'T4': 2},
                      [('T1', 'T2'), ('T1', 'T3'), ('T2', 'T4'), ('T3', 'T4')])


@pytest.fixture
def sample_graph():
    return TaskGraph.from_tasks(sample_tasks())


@pytest.fixture
def graph_factory():
    return make_graph
