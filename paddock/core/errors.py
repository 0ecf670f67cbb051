"""Error hierarchy.

FetchError subclasses are raised by feed clients and parsers and caught at
the fetch boundary. NoUpcomingEvent and NoDataAvailable end a render cycle;
callers turn them into an empty state. UnparseableSession is only ever
recovered locally.
"""


class PaddockError(Exception):
    """Base class for all paddock errors."""


class FetchError(PaddockError):
    """A feed could not be obtained."""


class NetworkFailure(FetchError):
    """Transport error, timeout or non-2xx response."""


class MalformedPayload(FetchError):
    """Feed body was empty, not JSON, or the wrong shape."""


class NoDataAvailable(FetchError):
    """No cached copy exists and the fetch failed."""


class NoUpcomingEvent(PaddockError):
    """Every event in the schedule is in the past."""


class UnparseableSession(PaddockError):
    """A single session timestamp is missing or unreadable."""

    def __init__(self, key: str, value: object):
        super().__init__(f"Unparseable session {key!r}: {value!r}")
        self.key = key
        self.value = value
