from datetime import datetime, timezone

from core.exceptions.invalid_timestamp_error import InvalidTimestampError

STORE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
_ACCEPTED_FORMATS = (STORE_TIMESTAMP_FORMAT, f"{STORE_TIMESTAMP_FORMAT}.%f")


def parse_utc_timestamp(value: str) -> datetime:
    """Parse a store timestamp.

    The store writes naive ``YYYY-MM-DD HH:MM:SS`` strings (optionally with a
    ``.ffffff`` fraction) that are always UTC. Anything else, including ISO
    strings carrying their own offset, is rejected with ``InvalidTimestampError``.
    """
    text = value.strip()

    for timestamp_format in _ACCEPTED_FORMATS:
        try:
            return datetime.strptime(text, timestamp_format).replace(tzinfo=timezone.utc)
        except ValueError:
            continue

    raise InvalidTimestampError(value)


def format_utc_timestamp(value: datetime) -> str:
    return as_utc(value).strftime(STORE_TIMESTAMP_FORMAT)


def as_utc(value: datetime | str | None) -> datetime | None:
    if value is None:
        return None

    if isinstance(value, str):
        return parse_utc_timestamp(value)

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)

    return value.astimezone(timezone.utc)
