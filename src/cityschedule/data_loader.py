import json
import logging
import math
import numbers
from pathlib import Path
from typing import Iterable, List

import pandas as pd

from .errors import DatasetError, MalformedGraphError
from .model import Task, TaskGraph

logger = logging.getLogger(__name__)


def _read_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == '.json':
        return pd.read_json(path, orient='records', dtype=False)
    if suffix == '.csv':
        return pd.read_csv(path, dtype={'id': str, 'dependencies': str}, keep_default_na=False)
    if suffix == '.xlsx':
        sheets = pd.read_excel(path, sheet_name=None, dtype={'id': str})
        if not sheets:
            raise DatasetError(f"No sheets found in {path}")
        return sheets.get('Tasks', next(iter(sheets.values())))
    raise DatasetError(f"Unsupported task file type {suffix!r} ({path})")


def _parse_deps(task_id: str, value) -> List[str]:
    if isinstance(value, (list, tuple)):
        return [str(d).strip() for d in value]
    if value is None or pd.isna(value):
        return []
    if isinstance(value, str):
        return [d.strip() for d in value.split(',') if d.strip()]
    # a lone numeric id from a spreadsheet cell
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return [str(int(value)) if float(value).is_integer() else str(value)]
    raise MalformedGraphError(f"Task {task_id}: cannot read dependencies {value!r}")


def _parse_duration(task_id: str, value) -> int:
    if isinstance(value, bool):
        raise MalformedGraphError(f"Task {task_id}: duration must be an integer, got {value!r}")
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and not math.isnan(value) and float(value).is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().lstrip('-').isdigit():
        return int(value.strip())
    raise MalformedGraphError(f"Task {task_id}: duration must be an integer, got {value!r}")


def load_tasks(path) -> List[Task]:
    """Read task records from a .json, .csv or .xlsx file.

    Each record has ``id``, ``name``, ``duration`` and ``dependencies``; in
    CSV and Excel files dependencies are a comma-separated string.
    """
    path = Path(path)
    try:
        df = _read_frame(path)
    except (OSError, ValueError) as e:
        raise DatasetError(f"Cannot read tasks from {path}: {e}") from e
    if df.empty:
        raise DatasetError(f"No tasks found in {path}")
    missing = {'id', 'duration'} - set(df.columns)
    if missing:
        raise DatasetError(f"{path} is missing column(s): {', '.join(sorted(missing))}")

    tasks = []
    for _, row in df.iterrows():
        tid = str(row['id']).strip()
        name = row.get('name')
        if name is None or pd.isna(name) or str(name).strip() == '':
            name = tid
        tasks.append(Task(
            id=tid,
            name=str(name).strip(),
            duration=_parse_duration(tid, row['duration']),
            dependencies=_parse_deps(tid, row.get('dependencies')),
        ))
    logger.info("Loaded %d tasks from %s", len(tasks), path)
    return tasks


def load_graph(path) -> TaskGraph:
    return TaskGraph.from_tasks(load_tasks(path))


def save_tasks(tasks: Iterable[Task], path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    records = [t.to_dict() for t in tasks]
    path.write_text(json.dumps(records, indent=2))
    logger.info("Saved %d tasks to %s", len(records), path)
    return path


def sample_tasks() -> List[Task]:
    """Smart-city maintenance sample; T9 -> T10 -> T11 -> T12 -> T9 is a cycle."""
    rows = [
        ('T1', 'Street Cleaning Zone A', 5, []),
        ('T2', 'Street Cleaning Zone B', 4, []),
        ('T3', 'Repair Traffic Light 1', 6, ['T1']),
        ('T4', 'Repair Traffic Light 2', 5, ['T2']),
        ('T5', 'Camera Installation', 8, ['T3', 'T4']),
        ('T6', 'Sensor Calibration', 3, ['T5']),
        ('T7', 'Data Analytics Setup', 7, ['T6']),
        ('T8', 'Network Configuration', 4, ['T5']),
        ('T9', 'System Test Phase 1', 6, ['T7', 'T8', 'T12']),
        ('T10', 'System Test Phase 2', 5, ['T9']),
        ('T11', 'Bug Fixes', 4, ['T10']),
        ('T12', 'Regression Testing', 3, ['T11']),
    ]
    return [Task(id=i, name=n, duration=d, dependencies=deps) for i, n, d, deps in rows]


def create_sample_file(path) -> Path:
    return save_tasks(sample_tasks(), path)
