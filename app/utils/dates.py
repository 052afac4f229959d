# app/utils/dates.py
from datetime import datetime, timezone


def start_of_current_month() -> datetime:
    now = datetime.now(timezone.utc)
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
