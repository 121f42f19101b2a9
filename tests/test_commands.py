import pytest
from pydantic import ValidationError

from time_moment.application.commands import (
    DateTimeStringInput,
    EpochInput,
    NowInput,
    parse_command_text,
    to_moment_input,
)


def test_to_moment_input_binds_python_values():
    assert isinstance(to_moment_input(), NowInput)
    assert isinstance(to_moment_input(""), NowInput)
    assert to_moment_input(0) == EpochInput(seconds=0)
    assert to_moment_input(1.5) == EpochInput(seconds=1.5)
    assert to_moment_input("2016-06-09T09:37:42-05") == DateTimeStringInput(text="2016-06-09T09:37:42-05")


def test_to_moment_input_passes_variants_through():
    variant = EpochInput(seconds=10)
    assert to_moment_input(variant) is variant


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", NowInput()),
        ("   ", NowInput()),
        ("1465483062", EpochInput(seconds=1465483062)),
        ("-86400", EpochInput(seconds=-86400)),
        ("1465483062.5", EpochInput(seconds=1465483062.5)),
        ("2016-06-09T09:37:42-05", DateTimeStringInput(text="2016-06-09T09:37:42-05")),
        ("20160609", EpochInput(seconds=20160609)),
    ],
)
def test_parse_command_text(text, expected):
    assert parse_command_text(text) == expected


def test_epoch_input_rejects_non_finite_and_strings():
    with pytest.raises(ValidationError):
        EpochInput(seconds=float("inf"))
    with pytest.raises(ValidationError):
        EpochInput(seconds="1465483062")


def test_to_moment_input_classifies_strings_like_command_text():
    assert to_moment_input("1465483062") == EpochInput(seconds=1465483062)
    assert to_moment_input("-1.5") == EpochInput(seconds=-1.5)
    assert isinstance(to_moment_input("   "), NowInput)
