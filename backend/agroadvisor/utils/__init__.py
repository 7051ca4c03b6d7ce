from .dates import parse_target_date, resolve_day_offset, MAX_DAY_OFFSET

__all__ = ["parse_target_date", "resolve_day_offset", "MAX_DAY_OFFSET"]
