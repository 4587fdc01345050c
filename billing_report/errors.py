"""Exceptions raised by the report stages."""


class ReportError(Exception):
    """Base class for every failure that aborts a report run."""


class ConfigError(ReportError):
    """Required environment configuration is missing or invalid."""


class ApiError(ReportError):
    """Cost Explorer could not be reached or rejected the request."""


class ParseError(ReportError):
    """The billing response could not be turned into cost entries."""


class ZeroTotalError(ReportError):
    """Total cost is zero, so per-service ratios are undefined."""


class RenderError(ReportError):
    """The pie chart could not be drawn."""


class DeliveryError(ReportError):
    """A Slack webhook post or file upload failed."""
