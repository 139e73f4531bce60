from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel

PREVIEW_LIMIT = 5


class DocumentFilters(BaseModel):
    """Filters applied locally to an already-fetched document list"""
    user: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    day: Optional[date] = None

    @property
    def is_active(self) -> bool:
        return bool(self.user or self.start_date or self.end_date or self.day)


def upload_time(document: Dict[str, Any]) -> datetime:
    """uploadDate of an API document as an aware UTC datetime"""
    value = document["uploadDate"]
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def filter_documents(documents: Sequence[Dict[str, Any]], filters: DocumentFilters) -> List[Dict[str, Any]]:
    """Apply uploader and date filters, newest first.

    A date range wins over the single-day filter. The end date is inclusive
    of the whole day.
    """
    filtered = list(documents)

    if filters.user:
        needle = filters.user.lower()
        filtered = [doc for doc in filtered if needle in (doc.get("uploadedByName") or "").lower()]

    if filters.start_date or filters.end_date:
        start = _day_start(filters.start_date) if filters.start_date else None
        end = _day_start(filters.end_date) + timedelta(days=1) if filters.end_date else None
        filtered = [
            doc for doc in filtered
            if (start is None or upload_time(doc) >= start) and (end is None or upload_time(doc) <= end)
        ]
    elif filters.day:
        filtered = [doc for doc in filtered if upload_time(doc).date() == filters.day]

    return sorted(filtered, key=upload_time, reverse=True)


def paginate(items: Sequence[Any], page: int = 1, per_page: int = 10) -> List[Any]:
    """One page of items; pages are 1-based"""
    if page < 1 or per_page < 1:
        raise ValueError("page and per_page must be positive")
    offset = (page - 1) * per_page
    return list(items[offset:offset + per_page])


def page_count(items: Sequence[Any], per_page: int = 10) -> int:
    return max(1, -(-len(items) // per_page))


def preview(items: Sequence[Any], show_more: bool = False, limit: int = PREVIEW_LIMIT) -> List[Any]:
    """First few items unless the full list was requested"""
    return list(items) if show_more else list(items[:limit])
