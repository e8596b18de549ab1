"""
Status event data model.

Milestone notifications emitted while an analysis run advances.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class RunState(Enum):
    """Pipeline states of a single run, in traversal order."""
    IDLE = "idle"
    PARSING = "parsing"
    EXTRACTING = "extracting"
    TOKENIZING = "tokenizing"
    AGGREGATING = "aggregating"
    SCORING = "scoring"
    WRITING = "writing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class StatusEvent:
    """
    One human-readable status notification.
    """
    state: RunState  # State the run was in when the event was emitted
    message: str  # Human-readable status text
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def terminal(self) -> bool:
        return self.state in (RunState.DONE, RunState.FAILED)

    def __str__(self) -> str:
        return self.message
