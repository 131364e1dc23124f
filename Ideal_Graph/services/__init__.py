"""Collaborator services used by diagram views."""

from .builder import DiagramBuilder, SchedulerMissingError
from .difference import Difference
from .scheduler import ComponentScheduler, Scheduler

__all__ = [
    "DiagramBuilder",
    "SchedulerMissingError",
    "Difference",
    "ComponentScheduler",
    "Scheduler",
]
