import re
import uuid
from datetime import date, datetime
from typing import Optional

from fastapi import Query

from ...domain.errors import InvalidFilterError
from ...domain.models import SummaryFilter

_DATE_FORMAT = "%Y-%m-%d"
_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_summary_filter(
    user_id: Optional[str] = Query(default=None, description="Filter by user ID (UUID)"),
    service_name: Optional[str] = Query(default=None, description="Filter by service name"),
    start_date: Optional[str] = Query(default=None, description="Started on or after (YYYY-MM-DD)"),
    end_date: Optional[str] = Query(default=None, description="Started on or before (YYYY-MM-DD)"),
) -> SummaryFilter:
    """Build a SummaryFilter from the query string; empty values count as absent."""
    parsed_user_id: Optional[uuid.UUID] = None
    if user_id:
        try:
            parsed_user_id = uuid.UUID(user_id)
        except ValueError as exc:
            raise InvalidFilterError("Invalid user_id format") from exc

    return SummaryFilter(
        user_id=parsed_user_id,
        service_name=service_name or None,
        start_date=_parse_date("start_date", start_date),
        end_date=_parse_date("end_date", end_date),
    )


def _parse_date(name: str, value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    if not _DATE_PATTERN.fullmatch(value):
        raise InvalidFilterError(f"Invalid {name} format, use YYYY-MM-DD")
    try:
        return datetime.strptime(value, _DATE_FORMAT).date()
    except ValueError as exc:
        raise InvalidFilterError(f"Invalid {name} format, use YYYY-MM-DD") from exc
