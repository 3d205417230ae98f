class ScheduleError(Exception):
    """Base class for every error raised by cityschedule."""


class MalformedGraphError(ScheduleError, ValueError):
    """Task records that cannot form a valid TaskGraph."""


class CycleError(ScheduleError):
    """A condensation graph that still contains a cycle.

    Condensations built from the SCC stage are acyclic, so this signals a
    defect upstream rather than bad user input.
    """


class _LookupError(ScheduleError, KeyError):
    what = 'id'

    def __str__(self):
        return f"unknown {self.what} {self.args[0]!r}" if self.args else f"unknown {self.what}"


class UnknownComponentError(_LookupError):
    """A path query named a component id that is not in the condensation."""
    what = 'component'


class UnknownTaskError(_LookupError):
    """A query named a task id that is not in the graph."""
    what = 'task'


class DatasetError(ScheduleError):
    """A task file that cannot be read or holds no tasks."""
