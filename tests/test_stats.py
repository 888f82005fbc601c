from types import SimpleNamespace

import pytest

from votely.services.stats import PollStats, compute_poll_stats, most_voted_option_text

COLOURS = ["Red", "Green", "Blue"]


def test_red_green_blue_scenario():
    stats = compute_poll_stats(COLOURS, [{"option_index": 0}, {"option_index": 0}, {"option_index": 1}])

    assert stats.vote_counts == (2, 1, 0)
    assert stats.total_votes == 3
    assert stats.most_voted_option == 0
    assert stats.most_voted_count == 2
    assert stats.percentages() == (66.7, 33.3, 0.0)
    assert most_voted_option_text(COLOURS, stats) == "Red"


def test_no_votes_has_no_leader_and_zero_percentages():
    stats = compute_poll_stats(COLOURS, [])

    assert stats.vote_counts == (0, 0, 0)
    assert stats.total_votes == 0
    assert stats.most_voted_option is None
    assert stats.most_voted_count == 0
    assert stats.percentages() == (0.0, 0.0, 0.0)
    assert most_voted_option_text(COLOURS, stats) is None


def test_ties_go_to_lowest_index():
    votes = [0, 0, 1, 1, 2]
    stats = compute_poll_stats(COLOURS, votes)

    assert stats.vote_counts == (2, 2, 1)
    assert stats.most_voted_option == 0


def test_later_option_can_lead():
    stats = compute_poll_stats(COLOURS, [2, 2, 1])
    assert stats.most_voted_option == 2


def test_out_of_range_votes_are_ignored():
    votes = [0, 3, 7, -1, {"option_index": 1}, {"option_index": None}, True, "1"]
    stats = compute_poll_stats(COLOURS, votes)

    assert stats.vote_counts == (1, 1, 0)
    assert stats.total_votes == 2


def test_accepts_objects_with_option_index():
    votes = [SimpleNamespace(option_index=1), SimpleNamespace(option_index=1)]
    stats = compute_poll_stats(COLOURS, votes)

    assert stats.vote_counts == (0, 2, 0)
    assert stats.most_voted_option == 1


def test_duplicate_rows_are_counted_as_given():
    row = {"option_index": 2}
    stats = compute_poll_stats(COLOURS, [row, row])
    assert stats.vote_counts == (0, 0, 2)


def test_empty_options_returns_empty_stats():
    stats = compute_poll_stats([], [0, 1, 2])

    assert stats == PollStats()
    assert stats.percentages() == ()
    assert stats.most_voted_option is None


@pytest.mark.parametrize("votes", [[], [0], [1, 1, 2], [0, 1, 2, 2, 2, 9]])
def test_total_is_sum_of_counts(votes):
    stats = compute_poll_stats(COLOURS, votes)
    assert sum(stats.vote_counts) == stats.total_votes


def test_percentage_uses_total_not_option_count():
    stats = compute_poll_stats(["Yes", "No", "Maybe", "Later"], [0, 1])
    assert stats.percentages() == (50.0, 50.0, 0.0, 0.0)
    assert stats.percentage(0, ndigits=2) == 50.0


def test_stats_are_immutable():
    stats = compute_poll_stats(COLOURS, [0])
    with pytest.raises(AttributeError):
        stats.total_votes = 5
