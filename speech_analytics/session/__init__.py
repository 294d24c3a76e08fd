from .controller import TranscriptAnalyzer
from .events import EventChannel
from .scheduler import AsyncioScheduler, ManualScheduler, ScheduledTask, Scheduler

__all__ = [
    "AsyncioScheduler",
    "EventChannel",
    "ManualScheduler",
    "ScheduledTask",
    "Scheduler",
    "TranscriptAnalyzer",
]
