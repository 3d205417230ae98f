import random

import networkx as nx

from cityschedule.data_loader import load_graph
from cityschedule.generator import DATASETS, contains_cycle, generate_all_datasets, generate_tasks
from cityschedule.model import Task, TaskGraph
from cityschedule.pipeline import run_analysis


def to_nx(graph):
    G = nx.DiGraph()
    G.add_nodes_from(graph.tasks)
    G.add_edges_from(graph.edges())
    return G


def test_dag_mode_is_acyclic():
    tasks = generate_tasks(20, 0.5, False, random.Random(1))
    g = TaskGraph.from_tasks(tasks)
    assert nx.is_directed_acyclic_graph(to_nx(g))
    assert g.edge_count() <= int(20 * 19 // 2 * 0.5)


def test_task_shape():
    tasks = generate_tasks(20, 0.3, True, random.Random(3))
    assert [t.id for t in tasks] == [f'T{i}' for i in range(1, 21)]
    assert tasks[0].name == 'Street Cleaning #1'
    assert tasks[18].name == 'Street Cleaning #2'
    assert all(2 <= t.duration <= 9 for t in tasks)
    TaskGraph.from_tasks(tasks)


def test_same_seed_same_tasks():
    a = generate_tasks(15, 0.35, True, random.Random(7))
    b = generate_tasks(15, 0.35, True, random.Random(7))
    assert a == b


def test_generate_all_datasets(tmp_path):
    stats = generate_all_datasets(tmp_path)
    assert [s['file'] for s in stats] == [d.filename for d in DATASETS]
    for spec, row in zip(DATASETS, stats):
        g = load_graph(tmp_path / spec.filename)
        assert len(g) == spec.num_nodes == row['vertices']
        assert g.edge_count() == row['edges']
        assert row['allow_cycles'] == spec.allow_cycles
        assert row['cyclic'] == (not nx.is_directed_acyclic_graph(to_nx(g)))
        a = run_analysis(g)
        assert sum(c.size for c in a.components) == spec.num_nodes
        if not spec.allow_cycles:
            assert len(a.components) == spec.num_nodes


def test_back_edge_without_return_path_is_not_a_cycle():
    one_way = [Task('T1', 'a', 2), Task('T2', 'b', 3), Task('T3', 'c', 4, ['T2'])]
    assert not contains_cycle(one_way)
    closed = one_way[:1] + [Task('T2', 'b', 3, ['T3']), one_way[2]]
    assert contains_cycle(closed)
