"""
Poll/option validation for create and edit requests.

Rules are checked in a fixed order and the first failure is raised as a
single ``PollValidationError``.
"""
from dataclasses import dataclass
from typing import Sequence, Tuple, Union

from ..exceptions import PollValidationError
from ..models.polls import Poll


@dataclass(frozen=True)
class PollInput:
    question: str
    options: Tuple[str, ...]


def split_options(raw: Union[str, Sequence[str], None]) -> Tuple[str, ...]:
    """Comma-separated string or pre-split sequence -> trimmed, non-empty options."""
    if raw is None:
        return ()
    parts = raw.split(",") if isinstance(raw, str) else raw
    trimmed = (str(part).strip() for part in parts)
    return tuple(part for part in trimmed if part)


def validate_poll_input(question, options) -> PollInput:
    question = (question or "").strip()
    if len(question) < Poll.QUESTION_MIN_LENGTH:
        raise PollValidationError(f"Question must be at least {Poll.QUESTION_MIN_LENGTH} characters")
    if len(question) > Poll.QUESTION_MAX_LENGTH:
        raise PollValidationError(f"Question must be at most {Poll.QUESTION_MAX_LENGTH} characters")

    cleaned = split_options(options)
    if len(cleaned) < Poll.MIN_OPTIONS:
        raise PollValidationError(f"Please provide at least {Poll.MIN_OPTIONS} options")
    if len(cleaned) > Poll.MAX_OPTIONS:
        raise PollValidationError(f"Please provide no more than {Poll.MAX_OPTIONS} options")

    for position, option in enumerate(cleaned, start=1):
        if not 1 <= len(option) <= Poll.OPTION_MAX_LENGTH:
            raise PollValidationError(
                f"Option {position} must be between 1 and {Poll.OPTION_MAX_LENGTH} characters"
            )

    seen = set()
    for option in cleaned:
        key = option.casefold()
        if key in seen:
            raise PollValidationError(f'Duplicate option: "{option}"')
        seen.add(key)

    return PollInput(question=question, options=cleaned)
