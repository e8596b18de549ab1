"""
Unit tests for the Report Writer and atomic storage.
"""

import os
from unittest.mock import patch

import pytest

from convostats.errors import ReportWriteError
from convostats.models.frequency import FrequencyTable
from convostats.stages.aggregation import FrequencyAggregator
from convostats.stages.reporting import ReportWriter, format_report
from convostats.utils.storage import StorageManager


@pytest.fixture
def tables():
    aggregator = FrequencyAggregator()
    tokens = ["the", "cat", "sat"]
    return aggregator.count(tokens), aggregator.count_filtered(tokens, {"the"})


def test_format_raw_report(tables):
    raw, _ = tables

    text = format_report(raw, "Most common words:", sentiment=0.25)

    assert text == (
        "Most common words:\n"
        "cat: 1 (33.33%)\n"
        "sat: 1 (33.33%)\n"
        "the: 1 (33.33%)\n"
        "\n"
        "Overall sentiment: 0.25\n"
    )


def test_format_filtered_report_has_no_sentiment(tables):
    _, filtered = tables

    text = format_report(filtered, "Most common words (without stop words):")

    assert text == (
        "Most common words (without stop words):\n"
        "cat: 1 (50.00%)\n"
        "sat: 1 (50.00%)\n"
    )


def test_format_empty_table():
    text = format_report(FrequencyTable.empty(), "Most common words:", sentiment=0.0)
    assert text == "Most common words:\n\nOverall sentiment: 0.0\n"


def test_format_respects_limit(tables):
    raw, _ = tables
    text = format_report(raw, "Header", limit=1)
    assert text == "Header\ncat: 1 (33.33%)\n"


def test_writer_creates_both_reports(tmp_path, tables):
    raw, filtered = tables
    writer = ReportWriter(StorageManager(str(tmp_path)))

    raw_path, filtered_path = writer.write(raw, filtered, 0.5)

    assert raw_path == str(tmp_path / "analysis_results.txt")
    assert filtered_path == str(tmp_path / "analysis_results_without_stopwords.txt")
    assert (tmp_path / "analysis_results.txt").read_text(encoding="utf-8").endswith(
        "\nOverall sentiment: 0.5\n"
    )
    assert (tmp_path / "analysis_results_without_stopwords.txt").read_text(
        encoding="utf-8"
    ).startswith("Most common words (without stop words):\n")
    assert sorted(os.listdir(tmp_path)) == [
        "analysis_results.txt",
        "analysis_results_without_stopwords.txt",
    ]


def test_writer_overwrites_previous_reports(tmp_path, tables):
    raw, filtered = tables
    (tmp_path / "analysis_results.txt").write_text("old contents", encoding="utf-8")
    writer = ReportWriter(StorageManager(str(tmp_path)))

    writer.write(raw, filtered, 0.0)

    assert "old contents" not in (tmp_path / "analysis_results.txt").read_text(encoding="utf-8")


def test_failed_write_leaves_existing_reports_and_no_temp_files(tmp_path, tables):
    raw, filtered = tables
    (tmp_path / "analysis_results.txt").write_text("previous run", encoding="utf-8")
    writer = ReportWriter(StorageManager(str(tmp_path)))

    with patch("convostats.utils.storage.os.replace", side_effect=OSError("disk full")):
        with pytest.raises(ReportWriteError):
            writer.write(raw, filtered, 0.0)

    assert (tmp_path / "analysis_results.txt").read_text(encoding="utf-8") == "previous run"
    assert os.listdir(tmp_path) == ["analysis_results.txt"]


def test_unwritable_directory_raises_report_write_error(tmp_path, tables):
    raw, filtered = tables
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")
    writer = ReportWriter(StorageManager(str(blocker / "reports")))

    with pytest.raises(ReportWriteError):
        writer.write(raw, filtered, 0.0)


def test_storage_write_text_atomic(tmp_path):
    storage = StorageManager(str(tmp_path / "nested"))

    path = storage.write_text_atomic("out.txt", "héllo\n")

    assert path == str(tmp_path / "nested" / "out.txt")
    assert (tmp_path / "nested" / "out.txt").read_text(encoding="utf-8") == "héllo\n"


def _fail_installing(filename):
    """os.replace stand-in that fails when a temp file is renamed onto filename."""
    real_replace = os.replace

    def replace(src, dst):
        if os.path.basename(dst) == filename and src.endswith(".tmp"):
            raise OSError("disk full")
        return real_replace(src, dst)

    return replace


def test_second_report_failure_restores_both_previous_reports(tmp_path, tables):
    raw, filtered = tables
    (tmp_path / "analysis_results.txt").write_text("previous raw", encoding="utf-8")
    (tmp_path / "analysis_results_without_stopwords.txt").write_text(
        "previous filtered", encoding="utf-8"
    )
    writer = ReportWriter(StorageManager(str(tmp_path)))

    with patch(
        "convostats.utils.storage.os.replace",
        side_effect=_fail_installing("analysis_results_without_stopwords.txt")
    ):
        with pytest.raises(ReportWriteError):
            writer.write(raw, filtered, 0.0)

    assert (tmp_path / "analysis_results.txt").read_text(encoding="utf-8") == "previous raw"
    assert (tmp_path / "analysis_results_without_stopwords.txt").read_text(
        encoding="utf-8"
    ) == "previous filtered"
    assert sorted(os.listdir(tmp_path)) == [
        "analysis_results.txt",
        "analysis_results_without_stopwords.txt",
    ]


def test_second_report_failure_without_previous_reports_leaves_nothing(tmp_path, tables):
    raw, filtered = tables
    writer = ReportWriter(StorageManager(str(tmp_path)))

    with patch(
        "convostats.utils.storage.os.replace",
        side_effect=_fail_installing("analysis_results_without_stopwords.txt")
    ):
        with pytest.raises(ReportWriteError):
            writer.write(raw, filtered, 0.0)

    assert os.listdir(tmp_path) == []


def test_successful_overwrite_leaves_no_backups(tmp_path, tables):
    raw, filtered = tables
    (tmp_path / "analysis_results.txt").write_text("old", encoding="utf-8")
    (tmp_path / "analysis_results_without_stopwords.txt").write_text("old", encoding="utf-8")
    writer = ReportWriter(StorageManager(str(tmp_path)))

    writer.write(raw, filtered, 0.0)

    assert sorted(os.listdir(tmp_path)) == [
        "analysis_results.txt",
        "analysis_results_without_stopwords.txt",
    ]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
