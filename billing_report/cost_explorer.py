import logging
from datetime import datetime, timedelta

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from billing_report.config import DEFAULT_REGION
from billing_report.dates import DATE_FORMAT
from billing_report.errors import ApiError

logger = logging.getLogger(__name__)

METRIC = "BlendedCost"
GRANULARITY = "MONTHLY"


def _exclusive_end(end):
    # Cost Explorer treats End as exclusive
    return (datetime.strptime(end, DATE_FORMAT) + timedelta(days=1)).strftime(DATE_FORMAT)


def fetch_cost_by_service(start, end, ce_client=None, region=DEFAULT_REGION):
    """Fetch the blended cost per service for the inclusive range start..end."""
    if ce_client is None:
        ce_client = boto3.client("ce", region_name=region)

    logger.info(f"Fetching billing data from {start} to {end}")
    response = None
    next_token = None
    while True:
        kwargs = {
            "TimePeriod": {"Start": start, "End": _exclusive_end(end)},
            "Granularity": GRANULARITY,
            "Metrics": [METRIC],
            "GroupBy": [{"Type": "DIMENSION", "Key": "SERVICE"}],
        }
        if next_token:
            kwargs["NextPageToken"] = next_token

        try:
            page = ce_client.get_cost_and_usage(**kwargs)
        except ClientError as e:
            err = e.response.get("Error", {})
            code = err.get("Code", "Unknown")
            msg = err.get("Message", str(e))
            raise ApiError(f"Cost Explorer call failed: {code} - {msg}") from e
        except BotoCoreError as e:
            # NoCredentialsError, EndpointConnectionError, ParamValidationError...
            raise ApiError(f"Cost Explorer call failed: {e}") from e

        if response is None:
            response = page
        else:
            # One month is queried, so every page continues the same time bucket
            for result in page.get("ResultsByTime", []):
                if response.get("ResultsByTime"):
                    response["ResultsByTime"][0].setdefault("Groups", []).extend(result.get("Groups", []))
                else:
                    response["ResultsByTime"] = [result]

        next_token = page.get("NextPageToken")
        if not next_token:
            break
        logger.debug("Cost Explorer returned another page of services")

    response.pop("NextPageToken", None)
    return response
