"""
Vote aggregation.

Turns a poll's option list and its raw vote rows into display-ready
statistics. Nothing here touches the database or the request; the same
inputs always give the same ``PollStats``.
"""
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence, Tuple


@dataclass(frozen=True)
class PollStats:
    vote_counts: Tuple[int, ...] = ()
    total_votes: int = 0
    # None when nobody has voted; never defaulted to option 0.
    most_voted_option: Optional[int] = None

    @property
    def most_voted_count(self) -> int:
        if self.most_voted_option is None:
            return 0
        return self.vote_counts[self.most_voted_option]

    def percentage(self, option_index: int, ndigits: int = 1) -> float:
        if self.total_votes <= 0:
            return 0.0
        return round(self.vote_counts[option_index] / self.total_votes * 100.0, ndigits)

    def percentages(self, ndigits: int = 1) -> Tuple[float, ...]:
        return tuple(self.percentage(i, ndigits) for i in range(len(self.vote_counts)))


def _option_index_of(vote: Any) -> Optional[int]:
    """Votes may arrive as model rows, plain dicts or bare ints."""
    if isinstance(vote, Mapping):
        value = vote.get("option_index")
    elif isinstance(vote, int):
        value = vote
    else:
        value = getattr(vote, "option_index", None)

    # bool is an int subclass; a stray True must not count as option 1
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def compute_poll_stats(options: Sequence[str], votes: Iterable[Any]) -> PollStats:
    """
    Count ``votes`` per option.

    Votes whose index falls outside ``options`` (e.g. left behind by an
    option-list edit) are skipped. Duplicate rows are counted as given.
    Ties for the lead go to the lowest index.
    """
    n = len(options or ())
    counts = [0] * n

    for vote in votes or ():
        idx = _option_index_of(vote)
        if idx is not None and 0 <= idx < n:
            counts[idx] += 1

    total = sum(counts)

    most_voted = None
    if total > 0:
        most_voted = 0
        for i in range(1, n):
            if counts[i] > counts[most_voted]:
                most_voted = i

    return PollStats(vote_counts=tuple(counts), total_votes=total, most_voted_option=most_voted)


def most_voted_option_text(options: Sequence[str], stats: PollStats) -> Optional[str]:
    if stats.most_voted_option is None:
        return None
    return options[stats.most_voted_option]
