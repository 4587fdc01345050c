from datetime import date, timedelta

DATE_FORMAT = "%Y-%m-%d"


def get_last_month_dates(today=None):
    """Calculate the first and last day of the month before `today`."""
    if today is None:
        today = date.today()
    last_day = date(today.year, today.month, 1) - timedelta(days=1)
    first_day = last_day.replace(day=1)
    return first_day.strftime(DATE_FORMAT), last_day.strftime(DATE_FORMAT)
