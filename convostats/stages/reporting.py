"""
Report Writer.

Formats frequency tables and the sentiment score into the two text reports.
"""

import logging
from typing import Optional, Tuple

from convostats.errors import ReportWriteError
from convostats.models.frequency import FrequencyTable
from convostats.utils.storage import StorageManager

logger = logging.getLogger(__name__)


def format_report(
    table: FrequencyTable,
    header: str,
    sentiment: Optional[float] = None,
    limit: Optional[int] = None
) -> str:
    """
    Render a frequency table as report text.

    Format:
        <header>
        <token>: <count> (<pct>%)      one line per ranked token
        <blank line>
        Overall sentiment: <score>     only when sentiment is given

    Args:
        table: Ranked frequency table
        header: First line of the report
        sentiment: Overall sentiment, appended when not None
        limit: Maximum number of ranked lines

    Returns:
        Report text ending with a newline
    """
    lines = [f"{header}\n"]
    for token, count, percentage in table.entries(limit):
        lines.append(f"{token}: {count} ({percentage:.2f}%)\n")

    if sentiment is not None:
        lines.append(f"\nOverall sentiment: {sentiment}\n")

    return "".join(lines)


class ReportWriter:
    """
    Writes the raw and stop-word-filtered reports.

    Both files are replaced together or not at all.
    """

    def __init__(
        self,
        storage: StorageManager,
        raw_filename: str = "analysis_results.txt",
        filtered_filename: str = "analysis_results_without_stopwords.txt",
        raw_header: str = "Most common words:",
        filtered_header: str = "Most common words (without stop words):",
        max_entries: int = 100_000
    ):
        self.storage = storage
        self.raw_filename = raw_filename
        self.filtered_filename = filtered_filename
        self.raw_header = raw_header
        self.filtered_header = filtered_header
        self.max_entries = max_entries

    def write(
        self,
        raw_table: FrequencyTable,
        filtered_table: FrequencyTable,
        sentiment: float
    ) -> Tuple[str, str]:
        """
        Write both reports.

        Returns:
            (raw report path, filtered report path)

        Raises:
            ReportWriteError: If either report cannot be written
        """
        raw_text = format_report(
            raw_table, self.raw_header, sentiment=sentiment, limit=self.max_entries
        )
        filtered_text = format_report(
            filtered_table, self.filtered_header, limit=self.max_entries
        )

        try:
            paths = self.storage.write_text_files_atomic({
                self.raw_filename: raw_text,
                self.filtered_filename: filtered_text,
            })
        except OSError as e:
            raise ReportWriteError(str(e)) from e

        logger.info(
            f"Reports written: {raw_table.distinct} raw entries, "
            f"{filtered_table.distinct} filtered entries"
        )
        return paths[self.raw_filename], paths[self.filtered_filename]
