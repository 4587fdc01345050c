import json
import logging

from billing_report.aggregate import aggregate
from billing_report.chart import draw_pie_chart
from billing_report.config import ReportConfig
from billing_report.cost_explorer import fetch_cost_by_service
from billing_report.dates import get_last_month_dates
from billing_report.formatter import format_report
from billing_report.slack import send_image, send_text

# Lambda captures the root logger
logger = logging.getLogger()
logger.setLevel(logging.INFO)


def build_report(config, ce_client=None, today=None):
    """Fetch last month's costs and prepare the report text."""
    start, end = get_last_month_dates(today)
    logger.info(f"start = {start}, end = {end}")

    response = fetch_cost_by_service(start, end, ce_client=ce_client, region=config.region)
    total_cost, entries = aggregate(response)
    logger.info(f"Retrieved costs for {len(entries)} services, total ${total_cost:.2f}")

    return {
        "start_date": start,
        "end_date": end,
        "total_cost": total_cost,
        "entries": entries,
        "text": format_report(config.account_name, start, end, total_cost, entries),
    }


def run_report(config, ce_client=None, today=None):
    """Build the monthly report and post the text, then the pie chart, to Slack."""
    report = build_report(config, ce_client=ce_client, today=today)
    send_text(config, report["text"])

    # The text is already posted, so a chart failure still fails the run
    chart = draw_pie_chart(report["entries"])
    try:
        send_image(config, chart)
    finally:
        chart.close()
    return report


def lambda_handler(event, context):
    """AWS Lambda function execution."""
    logger.info("Starting AWS monthly cost report...")

    if event and event.get("Records"):
        record = event["Records"][0]
        if "Sns" in record:
            logger.info(f"Received SNS message: {record['Sns'].get('Message', '{}')}")
    elif event and event.get("source"):
        logger.info(f"Triggered by {event['source']}")

    try:
        config = ReportConfig.from_env()
        report = run_report(config)
    except Exception as e:
        logger.error(f"Monthly cost report failed: {e}", exc_info=True)
        raise

    return {
        "statusCode": 200,
        "body": json.dumps({
            "message": "Monthly cost report sent to Slack",
            "account": config.account_name,
            "billing_period": f"{report['start_date']} to {report['end_date']}",
            "total_cost": report["total_cost"],
            "services": len(report["entries"]),
        }),
    }
