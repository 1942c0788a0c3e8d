from datetime import datetime, timezone

from livequiz.errors import InvalidRequest


def utcnow() -> datetime:
    """Naive UTC now, the form every timestamp is stored in."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_client_timestamp(value):
    """
    Convert a client timestamp to a naive UTC datetime.

    Accepts epoch milliseconds (int, float or numeric string, as sent by
    Date.now()) and ISO-8601 strings. Missing values give None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidRequest(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return _from_epoch_ms(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return _from_epoch_ms(float(text))
        except ValueError:
            pass
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            raise InvalidRequest(f"Invalid timestamp: {value!r}")
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed
    raise InvalidRequest(f"Invalid timestamp: {value!r}")


def _from_epoch_ms(ms):
    try:
        return datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc).replace(tzinfo=None)
    except (OverflowError, OSError, ValueError):
        raise InvalidRequest(f"Invalid timestamp: {ms!r}")


def to_iso(value):
    return value.isoformat() + "Z" if value else None
