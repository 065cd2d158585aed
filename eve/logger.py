"""
Console logger used across the eve CLI.

Messages are written as ``<LABEL> <message>`` lines with the label colored
using ANSI escape codes. The threshold comes from the ``LOG_LEVEL``
environment variable (debug, info, warn, error; warn when unset).

Debug messages that are a JSON document are pretty-printed instead of
being labelled, which keeps dumped payloads readable.
"""

import json
import os
import sys
from enum import IntEnum


class Level(IntEnum):
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3


# ANSI codes for each label
FAINT = "2"
YELLOW = "33"
RED = "31"

LABELS = {
    Level.DEBUG: ("DEBUG", FAINT),
    Level.INFO: ("INFO", FAINT),
    Level.WARN: ("WARN", YELLOW),
    Level.ERROR: ("ERROR", RED),
}


def colorize(text, color_code):
    """
    Wrap text in the given ANSI color code.

    Args:
        text (str): The text to color
        color_code (str): ANSI color code to use

    Returns:
        str: The escaped text
    """
    return f"\033[{color_code}m{text}\033[0m"


def level_from_env(environ=None):
    """
    Determine the log level from LOG_LEVEL.

    Unset means warn. Unknown values fall back to info.

    Args:
        environ (dict, optional): Environment to read, defaults to os.environ

    Returns:
        Level: The configured level
    """
    if environ is None:
        environ = os.environ
    lit = environ.get("LOG_LEVEL")
    if lit is None:
        lit = "warn"

    return {
        "debug": Level.DEBUG,
        "warn": Level.WARN,
        "error": Level.ERROR,
    }.get(lit.lower(), Level.INFO)


def _as_json(value):
    """Return value pretty-printed if it is a JSON document, else None."""
    if not isinstance(value, str):
        return None
    try:
        data = json.loads(value, parse_constant=_reject_constant)
    except ValueError:
        return None
    return json.dumps(data, indent=2)


def _reject_constant(name):
    # NaN and Infinity are not valid JSON
    raise ValueError(f"invalid JSON constant {name}")


class Logger:
    """
    Levelled console logger.

    Args:
        out (file, optional): Stream to write to, defaults to sys.stderr
        level (Level): Minimum level that gets printed
        color (bool, optional): Force color on or off. When None, color is
            used only if the stream is a terminal.
    """

    def __init__(self, out=None, level=Level.WARN, color=None):
        self.out = out if out is not None else sys.stderr
        self.level = Level(level)
        if color is None:
            isatty = getattr(self.out, "isatty", None)
            color = bool(isatty and isatty())
        self.color = color

    @classmethod
    def from_env(cls, out=None, environ=None):
        """Create a logger whose level comes from LOG_LEVEL."""
        return cls(out=out, level=level_from_env(environ))

    def enabled(self, level):
        return self.level <= level

    def _emit(self, level, args):
        label, color_code = LABELS[level]
        if self.color:
            label = colorize(label, color_code)
        message = " ".join(str(arg) for arg in args)
        print(label, message, file=self.out)

    def _debug(self, args):
        if args:
            pretty = _as_json(args[0])
            if pretty is not None:
                print(pretty, file=self.out)
                return
        self._emit(Level.DEBUG, args)

    def debug(self, *args):
        if self.enabled(Level.DEBUG):
            self._debug(args)

    def debugf(self, fmt, *args):
        if self.enabled(Level.DEBUG):
            self._debug((fmt % args if args else fmt,))

    def info(self, *args):
        if self.enabled(Level.INFO):
            self._emit(Level.INFO, args)

    def infof(self, fmt, *args):
        if self.enabled(Level.INFO):
            self._emit(Level.INFO, (fmt % args if args else fmt,))

    def warn(self, *args):
        if self.enabled(Level.WARN):
            self._emit(Level.WARN, args)

    def warnf(self, fmt, *args):
        if self.enabled(Level.WARN):
            self._emit(Level.WARN, (fmt % args if args else fmt,))

    def error(self, *args):
        if self.enabled(Level.ERROR):
            self._emit(Level.ERROR, args)

    def errorf(self, fmt, *args):
        if self.enabled(Level.ERROR):
            self._emit(Level.ERROR, (fmt % args if args else fmt,))


_default_logger = None


def get_logger():
    """Return the process-wide logger, creating it from LOG_LEVEL on first use."""
    global _default_logger
    if _default_logger is None:
        _default_logger = Logger.from_env()
    return _default_logger


def set_logger(logger):
    """Replace the process-wide logger and return the previous one."""
    global _default_logger
    previous = _default_logger
    _default_logger = logger
    return previous
