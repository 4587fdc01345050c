import os
from dataclasses import dataclass

from billing_report.errors import ConfigError

# Slack Webhook URL for the text summary
WEBHOOK_URL_VAR = "SLACK_WEBHOOK_URL"
# Slack API Token for file uploads
API_TOKEN_VAR = "SLACK_API_TOKEN"
# Slack Channel ID the chart is shared to
CHANNEL_ID_VAR = "SLACK_CHANNEL_ID"
# Display name of the AWS account in the report header
ACCOUNT_VAR = "AWS_ACCOUNT"

REGION_VAR = "COST_EXPLORER_REGION"
TIMEOUT_VAR = "SLACK_TIMEOUT"

# Cost Explorer is only served from us-east-1
DEFAULT_REGION = "us-east-1"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class ReportConfig:
    """Settings for one report run, read once at startup."""

    webhook_url: str
    api_token: str
    channel_id: str
    account_name: str
    region: str = DEFAULT_REGION
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ=None):
        """Build the config from environment variables (Lambda environment or shell)."""
        if environ is None:
            environ = os.environ

        required = (WEBHOOK_URL_VAR, API_TOKEN_VAR, CHANNEL_ID_VAR, ACCOUNT_VAR)
        missing = [name for name in required if not environ.get(name)]
        if missing:
            raise ConfigError(f"Missing environment variables: {', '.join(missing)}")

        raw_timeout = environ.get(TIMEOUT_VAR) or DEFAULT_TIMEOUT
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigError(f"{TIMEOUT_VAR} must be a number of seconds, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ConfigError(f"{TIMEOUT_VAR} must be positive, got {raw_timeout!r}")

        return cls(
            webhook_url=environ[WEBHOOK_URL_VAR],
            api_token=environ[API_TOKEN_VAR],
            channel_id=environ[CHANNEL_ID_VAR],
            account_name=environ[ACCOUNT_VAR],
            region=environ.get(REGION_VAR) or DEFAULT_REGION,
            timeout=timeout,
        )

    def __repr__(self):
        # Keep the webhook URL and token out of logs and tracebacks
        return (
            f"ReportConfig(channel_id={self.channel_id!r}, account_name={self.account_name!r}, "
            f"region={self.region!r}, timeout={self.timeout!r})"
        )
