from datetime import datetime, timezone
from fastapi import HTTPException
from ntplib import NTPClient, NTPException
from time import time

def get_current_unix_time(ntp: bool = False) -> float:
    if ntp:
        for _ in range(0, 10):
            try:
                return NTPClient().request('pool.ntp.org').tx_time
            except (NTPException, OSError):
                pass
        raise HTTPException(status_code=500, detail="Internal Server Error (NTP)")
    else:
        return time()

def get_current_utc_datetime(ntp: bool = False) -> datetime:
    return datetime.fromtimestamp(get_current_unix_time(ntp), timezone.utc)

def as_utc(date: datetime) -> datetime:
    # DATETIME columns come back naive and hold UTC
    return date.replace(tzinfo=timezone.utc) if date.tzinfo is None else date.astimezone(timezone.utc)

def is_ongoing(start_date: datetime, end_date: datetime, now: datetime) -> bool:
    return as_utc(start_date) <= as_utc(now) <= as_utc(end_date)
