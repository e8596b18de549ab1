"""
Analysis result data model.

Everything one completed run produced.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from convostats.models.frequency import FrequencyTable
from convostats.models.status import RunState


@dataclass
class AnalysisResult:
    """
    Summary of a successful analysis run.
    """
    raw_table: FrequencyTable  # All tokens
    filtered_table: FrequencyTable  # Tokens with stop words removed before counting
    sentiment: float  # Overall sentiment in [-1.0, 1.0]
    message_count: int  # Extracted message texts
    raw_report_path: str
    filtered_report_path: str
    started_at: datetime
    finished_at: datetime

    @property
    def elapsed_seconds(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()


@dataclass
class RunOutcome:
    """
    Terminal status of a run, published after the result is recorded.
    """
    state: RunState  # DONE or FAILED
    message: str  # Terminal status text
    result: Optional[AnalysisResult] = None  # Set only when state is DONE
