"""Run the monthly cost report locally instead of through Lambda."""

import argparse
import logging
import sys

from billing_report.chart import draw_pie_chart
from billing_report.config import ReportConfig
from billing_report.errors import ReportError
from billing_report.handler import build_report, run_report

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="billing_report",
        description="Post last month's AWS cost per service to Slack.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="print the report and save the chart instead of posting to Slack",
    )
    parser.add_argument(
        "--chart-out",
        default="output.png",
        help="where --dry-run writes the pie chart (default: %(default)s)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ReportConfig.from_env()
        if args.dry_run:
            report = build_report(config)
            print(report["text"])
            chart = draw_pie_chart(report["entries"])
            with open(args.chart_out, "wb") as f:
                f.write(chart.getvalue())
            logger.info(f"Pie chart written to {args.chart_out}")
        else:
            run_report(config)
    except ReportError as e:
        logger.error(f"error = {e}", exc_info=args.verbose)
        return 1
    except OSError as e:
        logger.error(f"Could not write pie chart to {args.chart_out}: {e}", exc_info=args.verbose)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
