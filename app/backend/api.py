from datetime import datetime, timedelta

from errors import ApiError


def parse_date_param(date_str):
    try:
        return datetime.strptime(str(date_str).strip(), "%Y-%m-%d").date()
    except ValueError as exc:
        raise ApiError(
            status_code=400,
            code="INVALID_DATE",
            message="Invalid date format. Use YYYY-MM-DD.",
            detail={"date": str(date_str)},
        ) from exc


def resolve_refresh_dates(date_str, tzinfo):
    if date_str:
        return [parse_date_param(date_str)]
    today = datetime.now(tzinfo).date()
    return [today, today + timedelta(days=1)]
