"""Levelled logging with a replaceable sink."""

import abc
import enum
import inspect
import sys
from dataclasses import dataclass


class LogLevel(enum.IntEnum):
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4


_LEVEL_NAMES = {
    LogLevel.TRACE: "Trace",
    LogLevel.DEBUG: "Debug",
    LogLevel.INFO: "Info",
    LogLevel.WARN: "Warn",
    LogLevel.ERROR: "Error",
}


@dataclass
class LogSettings:
    """Switches controlling which log calls produce output."""

    enable_trace_logs: bool = False
    enable_debug_logs: bool = False
    enable_logs: bool = True


class LogSink(abc.ABC):
    """Destination for log lines."""

    @abc.abstractmethod
    def start_log(self, level, file_name, line):
        """Begin a log line and return the text stream to write it to."""

    def level_name(self, level):
        try:
            return _LEVEL_NAMES[LogLevel(level)]
        except ValueError:
            return "Unknown"


class StreamLogSink(LogSink):
    """Writes log lines to a text stream, standard output by default."""

    def __init__(self, stream=None):
        self._stream = stream

    @property
    def stream(self):
        return self._stream if self._stream is not None else sys.stdout

    def start_log(self, level, file_name, line):
        stream = self.stream
        stream.write(f"{self.level_name(level)[0]}:{file_name}:{line}: ")
        return stream


class Logger:
    """Process-wide logging configuration."""

    _instance = None

    def __init__(self):
        self._sink = None
        self._default_sink = StreamLogSink()
        self.settings = LogSettings()

    @classmethod
    def instance(cls):
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def sink(self):
        return self._sink if self._sink is not None else self._default_sink

    @sink.setter
    def sink(self, sink):
        self._sink = sink


class LogWriter:
    """Accumulates one log line and ends it when closed.

    A writer without a stream discards everything written to it.
    """

    def __init__(self, stream=None):
        self._stream = stream
        self._closed = False

    def write(self, *args):
        if self._stream is not None and not self._closed:
            for value in args:
                self._stream.write(str(value))
        return self

    def __lshift__(self, value):
        return self.write(value)

    def close(self):
        if self._stream is not None and not self._closed:
            self._stream.write("\n")
            self._stream.flush()
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def __del__(self):
        try:
            self.close()
        except Exception:
            pass


def _enabled(settings, level):
    if not settings.enable_logs:
        return False
    if level == LogLevel.DEBUG and not settings.enable_debug_logs:
        return False
    if level == LogLevel.TRACE and not (
        settings.enable_trace_logs and settings.enable_debug_logs
    ):
        return False
    return True


def log(level):
    """Start a log line at ``level``, tagged with the caller's file and line."""
    logger = Logger.instance()
    if not _enabled(logger.settings, level):
        return LogWriter(None)
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    try:
        if caller is not None:
            file_name, line = caller.f_code.co_filename, caller.f_lineno
        else:
            file_name, line = "<unknown>", 0
    finally:
        del frame, caller
    return LogWriter(logger.sink.start_log(level, file_name, line))