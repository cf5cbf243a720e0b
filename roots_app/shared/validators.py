"""
Field and interval validation shared by the record services
"""

from datetime import date, datetime

from roots_app.services.exceptions import InvalidIntervalError, ValidationError


def parse_date(value, field: str) -> date | None:
    """Accept a date, a datetime, an ISO 'YYYY-MM-DD' string or None"""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            raise ValidationError(f"{field} must be a date in YYYY-MM-DD format, got {value!r}")
    raise ValidationError(f"{field} must be a date, got {type(value).__name__}")


def parse_dates(data: dict, fields) -> dict:
    """Return a copy of data with the named date fields parsed"""
    parsed = dict(data)
    for field in fields:
        if field in parsed:
            parsed[field] = parse_date(parsed[field], field)
    return parsed


def check_interval(start: date | None, end: date | None, start_field: str, end_field: str) -> None:
    """An interval with both ends known must not end before it starts"""
    if start is not None and end is not None and end < start:
        raise InvalidIntervalError(
            f"{end_field} ({end.isoformat()}) is before {start_field} ({start.isoformat()})"
        )


def require_fields(data: dict, fields) -> None:
    missing = [field for field in fields if data.get(field) in (None, '')]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def reject_unknown_fields(data: dict, allowed) -> None:
    unknown = sorted(set(data) - set(allowed))
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(unknown)}")


def parse_id(value, field: str) -> int | None:
    """Coerce an Individual id from JSON or query string input"""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer id")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer id, got {value!r}")


def check_text_fields(data: dict, limits: dict) -> None:
    """Text fields must be strings no longer than their column; None clears a field"""
    for field, limit in limits.items():
        value = data.get(field)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ValidationError(f"{field} must be a string, got {type(value).__name__}")
        if limit is not None and len(value) > limit:
            raise ValidationError(f"{field} must be at most {limit} characters, got {len(value)}")


def check_boolean(data: dict, field: str) -> None:
    if field in data and not isinstance(data[field], bool):
        raise ValidationError(f"{field} must be true or false, got {data[field]!r}")
