import pytest

from deskkit.args import UsageError, parse_flags


def test_grouped_flags_and_operands():
    options, operands = parse_flags(["-ab", "-c", "file1", "file2"], "")
    assert options == [("a", None), ("b", None), ("c", None)]
    assert operands == ["file1", "file2"]


def test_value_attached_to_flag():
    options, operands = parse_flags(["-nfile", "x"], "no")
    assert options == [("n", "file")]
    assert operands == ["x"]


def test_value_in_next_word():
    options, operands = parse_flags(["-o", "ref", "-f"], "no")
    assert options == [("o", "ref"), ("f", None)]
    assert operands == []


def test_value_ends_group():
    options, _ = parse_flags(["-fnref"], "n")
    assert options == [("f", None), ("n", "ref")]


def test_double_dash_stops_parsing():
    options, operands = parse_flags(["-a", "--", "-b"], "")
    assert options == [("a", None)]
    assert operands == ["-b"]


def test_lone_dash_is_operand():
    options, operands = parse_flags(["-", "-a"], "")
    assert options == []
    assert operands == ["-", "-a"]


def test_missing_value_raises():
    with pytest.raises(UsageError):
        parse_flags(["-n"], "n")


def test_empty_argv():
    assert parse_flags([], "n") == ([], [])