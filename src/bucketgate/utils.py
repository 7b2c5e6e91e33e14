import time
from datetime import UTC, datetime


def now() -> datetime:
    return datetime.now(UTC)


def now_millis() -> int:
    return time.time_ns() // 1_000_000
