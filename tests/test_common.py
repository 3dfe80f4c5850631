import dataclasses

import pytest

from ezlogger.common import LogLevel, LogMsg, SourceLocation


def test_levels_are_ordered_by_severity():
    levels = [LogLevel(value) for value in range(7)]
    assert levels == sorted(levels)
    assert levels == list(LogLevel)
    assert LogLevel(0) < LogLevel(2) < LogLevel(5) < LogLevel(6)


def test_level_values_match_macros():
    assert LogLevel(0) is LogLevel.TRACE
    assert LogLevel(1) is LogLevel.DEBUG
    assert LogLevel(2) is LogLevel.INFO
    assert LogLevel(3) is LogLevel.WARN
    assert LogLevel(4) is LogLevel.ERROR
    assert LogLevel(5) is LogLevel.FATAL
    assert LogLevel(6) is LogLevel.OFF


def test_unix_path_is_reduced_to_file_name():
    loc = SourceLocation("/home/user/project/main.cpp", 42, "run")
    assert loc.file_name == "main.cpp"
    assert loc.line == 42
    assert loc.func_name == "run"


def test_windows_path_is_reduced_to_file_name():
    loc = SourceLocation("C:\\work\\src\\handler.cpp", 7, "go")
    assert loc.file_name == "handler.cpp"


def test_forward_slash_wins_over_backslash():
    loc = SourceLocation("dir/sub\\name.cpp", 1, "f")
    assert loc.file_name == "sub\\name.cpp"


def test_plain_name_is_kept():
    loc = SourceLocation("plain.cpp", 3, "f")
    assert loc.file_name == "plain.cpp"


def test_default_location_is_empty():
    loc = SourceLocation()
    assert (loc.file_name, loc.line, loc.func_name) == ("", 0, "")


def test_log_msg_defaults_to_empty_location():
    msg = LogMsg(LogLevel.WARN, "disk almost full")
    assert msg.location == SourceLocation()
    assert msg.level is LogLevel.WARN
    assert msg.message == "disk almost full"


def test_log_msg_keeps_location():
    loc = SourceLocation("/a/b.cpp", 9, "main")
    msg = LogMsg(LogLevel.ERROR, "boom", loc)
    assert msg.location.file_name == "b.cpp"


def test_log_msg_is_immutable():
    msg = LogMsg(LogLevel.INFO, "x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        msg.message = "y"
    assert msg.message == "x"