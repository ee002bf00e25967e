"""Exceptions raised by the program store."""


class ProgramError(Exception):
    """Base class for every error the CLI reports as ``Error: <message>``."""


class ValidationError(ProgramError):
    """Raised when a required field is empty or imported data is malformed."""


class NotFoundError(ProgramError):
    """Raised when a program name (or one of its fields) is not stored."""


class ProgramIOError(ProgramError, OSError):
    """Raised when a config, export or import file cannot be read or written."""


class CorruptionWarning(UserWarning):
    """Issued when the config file is not valid JSON and has been reset."""
