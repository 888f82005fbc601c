import pytest

from votely.exceptions import PollValidationError, ValidationFailed
from votely.services.poll_input import PollInput, split_options, validate_poll_input


def _error(question, options):
    with pytest.raises(PollValidationError) as exc:
        validate_poll_input(question, options)
    return exc.value.message


def test_accepts_minimal_poll():
    result = validate_poll_input("Hello", "A, B")
    assert result == PollInput(question="Hello", options=("A", "B"))


def test_question_is_trimmed():
    assert validate_poll_input("   Lunch?  ", "Pizza,Tacos").question == "Lunch?"


def test_short_question_is_rejected():
    assert _error("Hi", "A, B") == "Question must be at least 5 characters"
    assert _error("   Hi   ", "A, B") == "Question must be at least 5 characters"
    assert _error(None, "A, B") == "Question must be at least 5 characters"


def test_long_question_is_rejected():
    assert _error("q" * 201, "A, B") == "Question must be at most 200 characters"
    assert validate_poll_input("q" * 200, "A, B").question == "q" * 200


def test_empty_options_are_dropped_before_counting():
    assert validate_poll_input("Which one?", "A,, ,B,").options == ("A", "B")
    assert _error("Which one?", "A, , ") == "Please provide at least 2 options"


def test_option_count_bounds():
    ten = ",".join(f"opt{i}" for i in range(10))
    eleven = ",".join(f"opt{i}" for i in range(11))

    assert len(validate_poll_input("Which one?", ten).options) == 10
    assert _error("Which one?", eleven) == "Please provide no more than 10 options"


def test_option_length_bound():
    assert _error("Which one?", ["A", "b" * 101]) == "Option 2 must be between 1 and 100 characters"
    assert validate_poll_input("Which one?", ["A", "b" * 100]).options[1] == "b" * 100


@pytest.mark.parametrize("options", ["A, A", "A, a", ["Yes", "No", "YES"]])
def test_duplicates_are_case_insensitive(options):
    assert _error("Which one?", options).startswith("Duplicate option")


def test_first_violated_rule_wins():
    # bad question and too few options: only the question is reported
    assert _error("Hi", "A") == "Question must be at least 5 characters"


def test_accepts_pre_split_sequence():
    assert validate_poll_input("Pick one", [" Red ", "Green", ""]).options == ("Red", "Green")


def test_split_options_handles_none():
    assert split_options(None) == ()


def test_poll_validation_error_is_a_validation_failure():
    with pytest.raises(ValidationFailed) as exc:
        validate_poll_input("Hi", "A, B")
    assert exc.value.status_code == 400
    assert exc.value.code == "VALIDATION_ERROR"
