"""
Unit tests for the Frequency Aggregator.
"""

import pytest

from convostats.models.frequency import FrequencyTable
from convostats.stages.aggregation import FrequencyAggregator, remove_stop_words
import config.settings as settings


@pytest.fixture
def aggregator():
    return FrequencyAggregator()


def test_counts_sum_to_total(aggregator):
    tokens = ["b", "a", "b", "c", "b", "a"]

    table = aggregator.count(tokens)

    assert table.total == 6
    assert sum(table.counts.values()) == table.total
    assert table.counts == {"b": 3, "a": 2, "c": 1}


def test_ranking_by_count_descending(aggregator):
    table = aggregator.count(["x", "y", "y", "z", "z", "z"])
    assert table.ranking == ["z", "y", "x"]


def test_ties_broken_alphabetically(aggregator):
    """Equal counts rank by ascending token regardless of input order."""
    table = aggregator.count(["the", "cat", "sat", "dog", "dog"])
    assert table.ranking == ["dog", "cat", "sat", "the"]

    reversed_table = aggregator.count(["dog", "sat", "cat", "the", "dog"])
    assert reversed_table.ranking == table.ranking


def test_empty_tokens(aggregator):
    table = aggregator.count([])

    assert table.total == 0
    assert table.counts == {}
    assert table.ranking == []
    assert list(table.entries()) == []


def test_percentages(aggregator):
    table = aggregator.count(["the", "cat", "sat"])

    entries = list(table.entries())

    assert [token for token, _, _ in entries] == ["cat", "sat", "the"]
    for _, count, percentage in entries:
        assert count == 1
        assert percentage == pytest.approx(100 / 3)


def test_filtering_happens_before_counting(aggregator):
    tokens = ["the", "cat", "sat", "on", "the", "mat", "cat"]

    table = aggregator.count_filtered(tokens, settings.STOP_WORDS)

    assert table.total == 4
    assert table.counts == {"cat": 2, "sat": 1, "mat": 1}
    assert table.ranking == ["cat", "mat", "sat"]
    assert table.percentage("cat") == pytest.approx(50.0)


def test_filtered_table_matches_restricted_multiset(aggregator):
    tokens = ["a", "b", "a", "c", "the", "c", "c", "not"]
    stop_words = {"a", "the", "not"}

    filtered = aggregator.count_filtered(tokens, stop_words)
    kept = [t for t in tokens if t not in stop_words]

    assert set(filtered.counts) == set(kept)
    assert filtered.counts == {t: kept.count(t) for t in set(kept)}
    assert filtered.total == len(kept)


def test_all_stop_words(aggregator):
    table = aggregator.count_filtered(["the", "and", "a"], settings.STOP_WORDS)
    assert table.total == 0
    assert table.ranking == []


def test_remove_stop_words_keeps_order():
    assert remove_stop_words(["the", "quick", "fox", "and", "dog"], {"the", "and"}) == ["quick", "fox", "dog"]


def test_entries_limit(aggregator):
    table = aggregator.count(["a", "a", "b", "c"])
    assert [t for t, _, _ in table.entries(limit=2)] == ["a", "b"]


def test_frequency_table_validates_total():
    with pytest.raises(ValueError):
        FrequencyTable(total=3, counts={"a": 1}, ranking=["a"])


def test_empty_table_percentage_is_zero():
    assert FrequencyTable.empty().percentage("anything") == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
