from datetime import datetime, timezone


def utcnow() -> datetime:
    """Текущее время в UTC (с tzinfo)"""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Приведение datetime к UTC; naive-значения считаются UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
