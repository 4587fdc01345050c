import json
import logging

import requests

from billing_report.errors import DeliveryError

logger = logging.getLogger(__name__)

SLACK_API_URL = "https://slack.com/api"
REPORT_TITLE = "*Monthly Report*"
IMAGE_FILENAME = "output.png"


def send_text(config, text):
    """Send the report text to the Slack incoming webhook."""
    payload = {"text": f"{REPORT_TITLE}\n {text}"}
    try:
        response = requests.post(
            config.webhook_url,
            data=json.dumps(payload),
            headers={"Content-Type": "application/json"},
            timeout=config.timeout,
        )
    except requests.RequestException as e:
        raise DeliveryError(f"Exception when sending message to Slack: {e}") from e

    if not response.ok:
        raise DeliveryError(
            f"Failed to send message to Slack. Status code: {response.status_code}, Response: {response.text}"
        )
    logger.info("✅ Message successfully sent to Slack.")


def _call_api(config, method, data):
    """Call a Slack Web API method and return its JSON body."""
    try:
        response = requests.post(
            f"{SLACK_API_URL}/{method}",
            headers={"Authorization": f"Bearer {config.api_token}"},
            data=data,
            timeout=config.timeout,
        )
    except requests.RequestException as e:
        raise DeliveryError(f"Exception when calling Slack {method}: {e}") from e

    if not response.ok:
        raise DeliveryError(f"HTTP error calling Slack {method}: {response.status_code}")
    try:
        body = response.json()
    except ValueError as e:
        raise DeliveryError(f"Slack {method} returned a non-JSON body") from e
    if not body.get("ok", False):
        raise DeliveryError(f"Slack API error from {method}: {body.get('error', 'Unknown error')}")
    return body


def send_image(config, buffer, filename=IMAGE_FILENAME):
    """Upload the chart image to the Slack channel."""
    content = buffer.getvalue()
    logger.info(f"Attempting to upload {filename} to Slack channel: {config.channel_id}")

    upload = _call_api(
        config,
        "files.getUploadURLExternal",
        {"filename": filename, "length": len(content)},
    )

    upload_url = upload.get("upload_url")
    file_id = upload.get("file_id")
    if not upload_url or not file_id:
        raise DeliveryError("Slack files.getUploadURLExternal returned no upload URL")

    try:
        response = requests.post(
            upload_url,
            files={"file": (filename, content, "image/png")},
            timeout=config.timeout,
        )
    except requests.RequestException as e:
        raise DeliveryError(f"Exception when uploading {filename} to Slack: {e}") from e
    if not response.ok:
        raise DeliveryError(f"HTTP error uploading {filename} to Slack: {response.status_code}")

    _call_api(
        config,
        "files.completeUploadExternal",
        {
            "files": json.dumps([{"id": file_id, "title": filename}]),
            "channel_id": config.channel_id,
        },
    )
    logger.info(f"✅ {filename} successfully uploaded to Slack.")
