"""Exceptions raised by tksctl commands."""


class TksError(Exception):
    """Base class for all tksctl errors."""


class UsageError(TksError):
    """The command line is missing a required argument or has a bad value."""


class ConfigurationError(TksError):
    """A required setting is missing or invalid."""


class LcmConnectionError(TksError):
    """The LCM server could not be reached. Not recoverable."""


class LcmRpcError(TksError):
    """The LCM server rejected the call or the deadline expired."""

    def __init__(self, code: str, details: str):
        self.code = code
        self.details = details
        super().__init__(f"{code}: {details}")
