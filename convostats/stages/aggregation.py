"""
Frequency Aggregator.

Counts token occurrences and ranks distinct tokens by frequency.
"""

import logging
from collections import Counter
from typing import AbstractSet, List, Sequence

import pandas as pd

from convostats.models.frequency import FrequencyTable

logger = logging.getLogger(__name__)


def remove_stop_words(tokens: Sequence[str], stop_words: AbstractSet[str]) -> List[str]:
    """Drop stop words from a token sequence, keeping order."""
    return [token for token in tokens if token not in stop_words]


class FrequencyAggregator:
    """
    Builds FrequencyTables from token sequences.

    Ranking order: count descending, then token ascending (code point
    order). Equal-count tokens therefore always appear alphabetically.
    """

    def count(self, tokens: Sequence[str]) -> FrequencyTable:
        """
        Count tokens and rank them.

        Args:
            tokens: Token sequence (any order)

        Returns:
            FrequencyTable whose counts sum to len(tokens)
        """
        counts = Counter(tokens)

        if not counts:
            logger.info("No tokens to count, returning empty frequency table")
            return FrequencyTable.empty()

        df = pd.DataFrame(
            {"token": list(counts.keys()), "count": list(counts.values())}
        )
        df = df.sort_values(
            ["count", "token"],
            ascending=[False, True],
            kind="mergesort"
        )

        table = FrequencyTable(
            total=len(tokens),
            counts=dict(counts),
            ranking=df["token"].tolist()
        )

        logger.info(
            f"Counted {table.total} tokens ({table.distinct} distinct)"
        )
        return table

    def count_filtered(
        self,
        tokens: Sequence[str],
        stop_words: AbstractSet[str]
    ) -> FrequencyTable:
        """
        Remove stop words from the token sequence, then count what remains.

        Args:
            tokens: Full token sequence
            stop_words: Words to exclude

        Returns:
            FrequencyTable over the filtered sequence
        """
        filtered = remove_stop_words(tokens, stop_words)
        logger.info(
            f"Removed {len(tokens) - len(filtered)} stop word occurrences "
            f"({len(filtered)} tokens remain)"
        )
        return self.count(filtered)
