import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Tuple

from .errors import MalformedGraphError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Task:
    id: str
    name: str
    duration: int
    dependencies: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'dependencies', tuple(self.dependencies))

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'name': self.name, 'duration': self.duration,
                'dependencies': list(self.dependencies)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        return cls(id=data['id'], name=data.get('name', data['id']),
                   duration=data['duration'], dependencies=data.get('dependencies') or ())


def _check_duration(task: Task):
    d = task.duration
    if isinstance(d, bool) or not isinstance(d, int):
        raise MalformedGraphError(f"Task {task.id}: duration must be an integer, got {d!r}")
    if d < 0:
        raise MalformedGraphError(f"Task {task.id}: duration must be >= 0, got {d}")


class TaskGraph:
    """Tasks keyed by id with forward and reverse adjacency.

    Edges point from a prerequisite to the task that depends on it. Every
    known task has an adjacency entry, possibly empty, and neighbour lists
    keep edge-insertion order.
    """

    def __init__(self):
        self.tasks: Dict[str, Task] = {}
        self.adjacency: Dict[str, List[str]] = {}
        self.reverse_adjacency: Dict[str, List[str]] = {}

    def add_task(self, task: Task):
        if task.id in self.tasks:
            raise MalformedGraphError(f"Duplicate task id {task.id}")
        _check_duration(task)
        self.tasks[task.id] = task
        self.adjacency[task.id] = []
        self.reverse_adjacency[task.id] = []

    def add_edge(self, src: str, dst: str):
        for tid in (src, dst):
            if tid not in self.tasks:
                raise MalformedGraphError(f"Edge {src} -> {dst} references unknown task {tid}")
        self.adjacency[src].append(dst)
        self.reverse_adjacency[dst].append(src)

    @classmethod
    def from_tasks(cls, tasks: Iterable[Task]) -> 'TaskGraph':
        """Build the graph and its edges from each task's dependency list.

        Every dependency must name a task in the same set; the first one that
        does not raises MalformedGraphError before any edge is recorded.
        """
        g = cls()
        for t in tasks:
            g.add_task(t)
        for t in g.tasks.values():
            for dep in t.dependencies:
                if dep not in g.tasks:
                    raise MalformedGraphError(f"Missing dependency {dep} for {t.id}")
        for t in g.tasks.values():
            for dep in t.dependencies:
                g.add_edge(dep, t.id)
        logger.debug("Built task graph: %d tasks, %d edges", len(g), g.edge_count())
        return g

    def task(self, task_id: str) -> Task:
        return self.tasks[task_id]

    def vertices(self) -> List[str]:
        return list(self.tasks)

    def edges(self) -> Iterator[Tuple[str, str]]:
        for src, targets in self.adjacency.items():
            for dst in targets:
                yield src, dst

    def edge_count(self) -> int:
        return sum(len(v) for v in self.adjacency.values())

    def __len__(self):
        return len(self.tasks)

    def __contains__(self, task_id):
        return task_id in self.tasks


@dataclass
class Component:
    """A strongly connected component: member task ids in pop order."""
    id: int
    task_ids: List[str] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.task_ids)

    def __str__(self):
        return f"Component{{id={self.id}, size={self.size}, tasks={self.task_ids}}}"


@dataclass
class CondensationGraph:
    components: List[Component]
    adjacency: Dict[int, List[int]]
    weights: Dict[int, int]

    def weight(self, component_id: int) -> int:
        return self.weights.get(component_id, 0)

    def successors(self, component_id: int) -> List[int]:
        return self.adjacency[component_id]

    def component(self, component_id: int) -> Component:
        return self.components[component_id]

    def edge_count(self) -> int:
        return sum(len(v) for v in self.adjacency.values())

    def __len__(self):
        return len(self.components)

    def __contains__(self, component_id):
        return component_id in self.adjacency


@dataclass
class PathResult:
    """A path of component ids and its weighted length; length -1 means no path."""
    path: List[int]
    length: int

    @property
    def exists(self) -> bool:
        return self.length >= 0 and bool(self.path)

    @classmethod
    def none(cls) -> 'PathResult':
        return cls(path=[], length=-1)
