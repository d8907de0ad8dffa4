"""Date manipulation utilities"""

from datetime import date, timedelta


def parse_iso_date(value: str) -> date:
    """Parse a YYYY-MM-DD string (a trailing time part is ignored)"""
    return date.fromisoformat(value.strip()[:10])


def month_key(day: date) -> str:
    """YYYY-MM key for grouping by calendar month"""
    return day.strftime("%Y-%m")


def days_ago(days: int, today: date | None = None) -> date:
    """Date a number of days before today"""
    if today is None:
        today = date.today()
    return today - timedelta(days=days)
