"""
Exception types raised by eve.

Every error the CLI reports to the user derives from EveError. The CLI
catches it at the top level, logs the message and exits with status 1.
"""


class EveError(Exception):
    """Base class for all errors reported by eve."""


class ConfigError(EveError):
    """The project configuration file is malformed."""


class StateError(EveError):
    """A state variable is missing or could not be read."""


class EnvFileError(EveError, OSError):
    """
    An env-file could not be read.

    Args:
        path (str): The env-file that failed
        reason (str): Description of the underlying failure
    """

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(f"failed to parse env file '{path}': {reason}")

    def __str__(self):
        return self.args[0]


class EnvParseError(EveError, ValueError):
    """
    An env spec could not be parsed.

    Reserved: every non-blank line is accepted as either KEY=VALUE or a
    bare KEY, so nothing raises this today.
    """


class PackError(EveError):
    """The pack binary could not be started or exited with an error."""

    def __init__(self, message, returncode=None):
        super().__init__(message)
        self.returncode = returncode
