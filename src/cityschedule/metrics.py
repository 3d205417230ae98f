"""Operation counters and timing for the graph algorithms.

Each algorithm calls ``reset()`` and ``start_timer()`` on entry and
``stop_timer()`` on exit, so a Metrics handle always describes the most
recent invocation it was passed to. Updates assume a single writer.
"""
import time
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict


@dataclass(frozen=True)
class MetricsSnapshot:
    elapsed_ns: int
    counters: Dict[str, int] = field(default_factory=dict)

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000

    def to_dict(self):
        return {'elapsed_ms': round(self.elapsed_ms, 3), 'counters': dict(self.counters)}


class Metrics:
    def __init__(self):
        self._start = 0
        self._end = 0
        self._counters: Dict[str, int] = defaultdict(int)

    def start_timer(self):
        self._start = time.perf_counter_ns()

    def stop_timer(self):
        self._end = time.perf_counter_ns()

    @property
    def elapsed_ns(self) -> int:
        return max(0, self._end - self._start)

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns / 1_000_000

    def increment(self, name: str, amount: int = 1):
        self._counters[name] += amount

    def counter(self, name: str) -> int:
        return self._counters.get(name, 0)

    def reset(self):
        self._start = 0
        self._end = 0
        self._counters.clear()

    def snapshot(self) -> MetricsSnapshot:
        return MetricsSnapshot(elapsed_ns=self.elapsed_ns, counters=dict(self._counters))

    def report(self) -> str:
        lines = ['=== Metrics Report ===',
                 f'Elapsed Time: {self.elapsed_ms:.3f} ms ({self.elapsed_ns} ns)',
                 '', 'Operation Counters:']
        for name in sorted(self._counters):
            lines.append(f'  {name}: {self._counters[name]:,}')
        return '\n'.join(lines)

    def __str__(self):
        return self.report()
