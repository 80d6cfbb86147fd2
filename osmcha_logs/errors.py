"""Exception types raised while building changeset discussion reports."""

from typing import List


class OsmchaLogsError(Exception):
    """Base class for all errors raised by this package."""


class ValidationError(OsmchaLogsError):
    """An outbound request descriptor did not have the required shape."""

    def __init__(self, message: str, fields: List[str] = None):
        super().__init__(message)
        self.fields = fields or []


class NetworkError(OsmchaLogsError):
    """The OSMCHA API could not be reached or answered with an error status."""

    def __init__(self, message: str, url: str = None, status_code: int = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(OsmchaLogsError):
    """A response body was not the JSON document we expected."""


class PaginationLimitError(OsmchaLogsError):
    """The server kept returning next links past the configured page limit."""


class ConfigError(OsmchaLogsError):
    """The username list or command line configuration is unusable."""
