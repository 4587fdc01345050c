from billing_report.chart import OTHERS_LABEL, OTHERS_THRESHOLD


def format_report(account, start, end, total_cost, entries):
    """Format the period, the total and each service's cost as a Slack message."""
    message = (
        f"*AWS Account: {account}*\n"
        f"*Start: {start}, End: {end}*\n"
        f"*Total Cost: ${total_cost:.2f}*\n"
    )
    for entry in entries:
        message += f"*{entry.name}*: {entry.cost:.2f}({entry.ratio:.1f})%\n"
    message += (
        f"Services under {OTHERS_THRESHOLD:.1f}% of the total cost "
        f"are grouped as {OTHERS_LABEL} in the pie chart"
    )
    return message
