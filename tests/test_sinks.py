import io

import pytest

from ezlogger.common import LogLevel, LogMsg, SourceLocation
from ezlogger.formatter import Formatter
from ezlogger.sinks import ConsoleSink, LogSink


class FixedFormatter(Formatter):
    def format(self, msg):
        return f"<{msg.message}>"


class BrokenFormatter(Formatter):
    def format(self, msg):
        raise RuntimeError("boom")


def _msg(text="payload"):
    return LogMsg(LogLevel.WARN, text, SourceLocation("a/b.py", 3, "f"))


def test_log_sink_is_abstract():
    with pytest.raises(TypeError):
        LogSink()


def test_console_sink_writes_one_line():
    stream = io.StringIO()
    sink = ConsoleSink(stream)
    sink.log(_msg("payload"))
    out = stream.getvalue()
    assert out.endswith("payload\n")
    assert out.count("\n") == 1
    assert "[W]" in out


def test_console_sink_uses_custom_formatter():
    stream = io.StringIO()
    sink = ConsoleSink(stream)
    sink.set_formatter(FixedFormatter())
    sink.log(_msg("x"))
    sink.log(_msg("y"))
    assert stream.getvalue() == "<x>\n<y>\n"


def test_set_formatter_none_rejected():
    sink = ConsoleSink(io.StringIO())
    with pytest.raises(ValueError):
        sink.set_formatter(None)


def test_set_formatter_wrong_type_rejected():
    sink = ConsoleSink(io.StringIO())
    with pytest.raises(TypeError):
        sink.set_formatter("not a formatter")


def test_format_error_goes_to_stderr(capsys):
    stream = io.StringIO()
    sink = ConsoleSink(stream)
    sink.set_formatter(BrokenFormatter())
    sink.log(_msg())
    assert stream.getvalue() == ""
    assert "ConsoleSink format error: boom" in capsys.readouterr().err


def test_default_stream_is_stdout(capsys):
    sink = ConsoleSink()
    sink.set_formatter(FixedFormatter())
    sink.log(_msg("out"))
    sink.flush()
    assert capsys.readouterr().out == "<out>\n"