"""Logical storage paths shared by every backend.

Paths alternate collection and document segments::

    users/{userId}/trainingTypes/{typeId}
    users/{userId}/attendances/{yearMonth}/days/{date}
    users/{userId}/healthLogs/{yearMonth}/entries/{logId}
    ingredients/{stdId}
    supplementProducts/{productId}
    users/{userId}
"""

import re
from datetime import date

BUCKET_RE = re.compile(r"^\d{4}-(0[1-9]|1[0-2])$")

USERS = "users"
TRAINING_TYPES = "trainingTypes"
ATTENDANCES = "attendances"
ATTENDANCE_DAYS = "days"
HEALTH_LOGS = "healthLogs"
HEALTH_LOG_ENTRIES = "entries"
INGREDIENTS = "ingredients"
PRODUCTS = "supplementProducts"
BUCKETED_COLLECTIONS = frozenset({ATTENDANCES, HEALTH_LOGS})


def bucket_key(date_str: str) -> str:
    """Year-month bucket of a ``YYYY-MM-DD`` date."""
    return date_str[:7]


def month_bucket(year: int, month: int) -> str:
    if not 1 <= month <= 12:
        raise ValueError(f"Month must be 1-12, got {month}")
    return f"{year:04d}-{month:02d}"


def buckets_between(start: date, end: date) -> list[str]:
    """All buckets touched by the inclusive range, in calendar order."""
    if end < start:
        return []
    keys = []
    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        keys.append(month_bucket(year, month))
        month += 1
        if month > 12:
            year, month = year + 1, 1
    return keys


def join(*segments: str) -> str:
    for segment in segments:
        if not segment or "/" in segment:
            raise ValueError(f"Invalid path segment: {segment!r}")
    return "/".join(segments)


def split(path: str) -> list[str]:
    return [segment for segment in path.split("/") if segment]


def split_bucket(collection_path: str) -> tuple[str, str | None]:
    """Split a bucketed collection path into (root collection, bucket).

    ``users/u1/attendances/2024-03/days`` -> ``("users/u1/attendances", "2024-03")``.
    Non-bucketed paths come back unchanged with ``None``.
    """
    segments = split(collection_path)
    if (
        len(segments) >= 5
        and len(segments) % 2 == 1
        and segments[-3] in BUCKETED_COLLECTIONS
        and BUCKET_RE.match(segments[-2])
    ):
        return "/".join(segments[:-2]), segments[-2]
    return "/".join(segments), None


def user_doc(user_id: str) -> tuple[str, str]:
    return USERS, user_id


def training_types(user_id: str) -> str:
    return join(USERS, user_id, TRAINING_TYPES)


def attendance_days(user_id: str, year_month: str) -> str:
    return join(USERS, user_id, ATTENDANCES, year_month, ATTENDANCE_DAYS)


def health_log_entries(user_id: str, year_month: str) -> str:
    return join(USERS, user_id, HEALTH_LOGS, year_month, HEALTH_LOG_ENTRIES)


def ingredients() -> str:
    return INGREDIENTS


def products() -> str:
    return PRODUCTS
