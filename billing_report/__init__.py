"""Monthly AWS cost report posted to Slack."""

__version__ = "1.0.0"
