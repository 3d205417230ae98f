import json

import pandas as pd
import pytest

from cityschedule.data_loader import (create_sample_file, load_graph, load_tasks,
                                      sample_tasks, save_tasks)
from cityschedule.errors import DatasetError, MalformedGraphError
from cityschedule.model import Task


def test_json_round_trip(tmp_path):
    path = save_tasks(sample_tasks(), tmp_path / 'tasks.json')
    loaded = load_tasks(path)
    assert loaded == sample_tasks()


def test_json_format_matches_records(tmp_path):
    path = create_sample_file(tmp_path / 'out' / 'tasks.json')
    records = json.loads(path.read_text())
    assert records[0] == {'id': 'T1', 'name': 'Street Cleaning Zone A', 'duration': 5, 'dependencies': []}
    assert records[8]['dependencies'] == ['T7', 'T8', 'T12']


def test_csv_with_comma_separated_dependencies(tmp_path):
    path = tmp_path / 'tasks.csv'
    pd.DataFrame([
        {'id': 'A', 'name': 'Survey', 'duration': 3, 'dependencies': ''},
        {'id': 'B', 'name': 'Dig', 'duration': 5, 'dependencies': 'A'},
        {'id': 'C', 'name': '', 'duration': 2, 'dependencies': 'A, B'},
    ]).to_csv(path, index=False)
    tasks = load_tasks(path)
    assert tasks[1] == Task('B', 'Dig', 5, ('A',))
    assert tasks[2].dependencies == ('A', 'B')
    assert tasks[2].name == 'C'
    g = load_graph(path)
    assert g.adjacency['A'] == ['B', 'C']


def test_float_durations_that_are_whole_numbers(tmp_path):
    path = tmp_path / 'tasks.json'
    path.write_text(json.dumps([{'id': 'A', 'name': 'a', 'duration': 4.0, 'dependencies': []}]))
    assert load_tasks(path)[0].duration == 4


def test_fractional_duration_rejected(tmp_path):
    path = tmp_path / 'tasks.json'
    path.write_text(json.dumps([{'id': 'A', 'name': 'a', 'duration': 2.5, 'dependencies': []}]))
    with pytest.raises(MalformedGraphError):
        load_tasks(path)


def test_unknown_dependency_is_structural_error(tmp_path):
    path = tmp_path / 'tasks.json'
    path.write_text(json.dumps([{'id': 'A', 'name': 'a', 'duration': 1, 'dependencies': ['Z']}]))
    with pytest.raises(MalformedGraphError, match='Z'):
        load_graph(path)


def test_empty_file(tmp_path):
    path = tmp_path / 'tasks.json'
    path.write_text('[]')
    with pytest.raises(DatasetError, match='No tasks'):
        load_tasks(path)


def test_missing_file_and_bad_suffix(tmp_path):
    with pytest.raises(DatasetError):
        load_tasks(tmp_path / 'absent.json')
    bad = tmp_path / 'tasks.txt'
    bad.write_text('x')
    with pytest.raises(DatasetError, match='Unsupported'):
        load_tasks(bad)


def test_missing_columns(tmp_path):
    path = tmp_path / 'tasks.csv'
    path.write_text('id,name\nA,a\n')
    with pytest.raises(DatasetError, match='duration'):
        load_tasks(path)


def test_xlsx_with_numeric_ids(tmp_path):
    path = tmp_path / 'plan.xlsx'
    with pd.ExcelWriter(path) as writer:
        pd.DataFrame({'note': ['see Tasks sheet']}).to_excel(writer, sheet_name='Notes', index=False)
        pd.DataFrame([
            {'id': 1, 'name': 'Survey', 'duration': 3, 'dependencies': None},
            {'id': 2, 'name': 'Dig', 'duration': 5, 'dependencies': 1},
            {'id': 3, 'name': 'Pave', 'duration': 2, 'dependencies': '1, 2'},
        ]).to_excel(writer, sheet_name='Tasks', index=False)
    tasks = load_tasks(path)
    assert [t.id for t in tasks] == ['1', '2', '3']
    assert tasks[0].dependencies == ()
    assert tasks[1] == Task('2', 'Dig', 5, ('1',))
    assert tasks[2].dependencies == ('1', '2')
    g = load_graph(path)
    assert g.adjacency == {'1': ['2', '3'], '2': ['3'], '3': []}


def test_xls_is_not_supported(tmp_path):
    legacy = tmp_path / 'tasks.xls'
    legacy.write_bytes(b'')
    with pytest.raises(DatasetError, match='Unsupported'):
        load_tasks(legacy)


def test_unreadable_dependencies(tmp_path):
    path = tmp_path / 'tasks.json'
    path.write_text(json.dumps([{'id': 'A', 'name': 'a', 'duration': 1, 'dependencies': {'on': 'B'}}]))
    with pytest.raises(MalformedGraphError, match='dependencies'):
        load_tasks(path)
