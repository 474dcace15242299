"""Errors raised by the chart service"""


class SummaryDecodeError(ValueError):
    """A stored summary payload could not be decoded as UTF-8 JSON"""


class SummaryTimeError(SummaryDecodeError):
    """A stored summary has a capture time that is not ISO 8601"""


class InvalidRangeError(ValueError):
    """Requested date range ends before it starts"""
