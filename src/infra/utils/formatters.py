from datetime import datetime, timezone
from typing import Optional


def format_bytes(bytes_size: int | float) -> str:
    if bytes_size < 0:
        raise ValueError("Bytes size must be non-negative")

    units = ["B", "KB", "MB", "GB", "TB"]

    for unit in units:
        if bytes_size < 1024.0:
            return f"{bytes_size:.2f} {unit}"

        bytes_size /= 1024.0

    return f"{bytes_size:.2f} PB"


def format_time(elapsed_seconds: float) -> str:
    DAY_SECONDS = 86_400
    HOUR_SECONDS = 3_600
    MINUTE_SECONDS = 60

    days, remainder = divmod(elapsed_seconds, DAY_SECONDS)
    hours, remainder = divmod(remainder, HOUR_SECONDS)
    minutes, seconds = divmod(remainder, MINUTE_SECONDS)

    return f"{int(days):02d}d {int(hours):02d}h {int(minutes):02d}m {seconds:05.2f}s"


def format_duration(since: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Coarse "up for" duration shown on the dashboard, e.g. ``2d 3h`` or ``45s``."""
    if since is None:
        return "Unknown"

    now = now or datetime.now(timezone.utc)
    total_seconds = max(int((now - since).total_seconds()), 0)

    minutes, seconds = divmod(total_seconds, 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)

    if days > 0:
        return f"{days}d {hours}h"

    if hours > 0:
        return f"{hours}h {minutes}m"

    if minutes > 0:
        return f"{minutes}m {seconds}s"

    return f"{seconds}s"


def format_response_time(response_time_ms: Optional[int]) -> str:
    if response_time_ms is None:
        return "-"

    return f"{response_time_ms}ms"
