"""
Frequency table data model.

Represents word counts and their ranking for one token sequence.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple


@dataclass
class FrequencyTable:
    """
    Word occurrence counts plus a deterministic ranking.
    Output of the Frequency Aggregator.
    """
    total: int  # Number of tokens counted
    counts: Dict[str, int] = field(default_factory=dict)  # Distinct token -> occurrences
    ranking: List[str] = field(default_factory=list)  # Count descending, then token ascending

    def __post_init__(self):
        counted = sum(self.counts.values())
        if counted != self.total:
            raise ValueError(
                f"Counts sum to {counted} but total is {self.total}"
            )
        if len(self.ranking) != len(self.counts):
            raise ValueError(
                f"Ranking has {len(self.ranking)} tokens, counts has {len(self.counts)}"
            )

    @property
    def distinct(self) -> int:
        return len(self.counts)

    def percentage(self, token: str) -> float:
        """Share of the total, in percent. 0.0 for an empty table."""
        if self.total == 0:
            return 0.0
        return self.counts.get(token, 0) / self.total * 100

    def entries(self, limit: Optional[int] = None) -> Iterator[Tuple[str, int, float]]:
        """Yield (token, count, percentage) in ranking order."""
        ranked = self.ranking if limit is None else self.ranking[:limit]
        for token in ranked:
            yield token, self.counts[token], self.percentage(token)

    @classmethod
    def empty(cls) -> "FrequencyTable":
        return cls(total=0)
