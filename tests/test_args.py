import pytest

from oceanlab.args import exist_arg, get_arg


def test_get_arg_returns_following_word():
    assert get_arg("-r", ["-c", "9", "-r", "12"]) == "12"


def test_get_arg_missing_flag_is_none():
    assert get_arg("-r", ["-c", "9"]) is None


def test_get_arg_flag_at_end_is_none():
    assert get_arg("-r", ["-c", "9", "-r"]) is None


def test_get_arg_requires_exact_match():
    assert get_arg("-r", ["-rr", "4", "x-r", "5"]) is None


def test_get_arg_uses_first_occurrence():
    assert get_arg("-o", ["-o", "first", "-o", "second"]) == "first"


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["-g"], True),
        (["-r", "5", "-g"], True),
        (["-gg"], False),
        ([], False),
        (["--g"], False),
    ],
)
def test_exist_arg(argv, expected):
    assert exist_arg("-g", argv) is expected