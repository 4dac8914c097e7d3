from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Any, Dict, Iterable, List, Optional

from timegrid.codec import format_instant, parse_instant, to_local
from timegrid.errors import InvalidInput
from timegrid.importance import Importance, color_key, display_label, normalize_importance

logger = logging.getLogger(__name__)


def _flag(value) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "t", "yes"}
    return bool(value)


def _stamp(value) -> Optional[str]:
    if value is None:
        return None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


@dataclass(frozen=True)
class CalendarItem:
    id: str
    title: str
    start: datetime
    end: datetime
    importance: Importance = Importance.NONE
    description: Optional[str] = None
    is_task: bool = False
    complete: bool = False
    archived: bool = False
    owner_id: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "CalendarItem":
        """Build the in-memory item from a stored row.

        Raises InvalidInput when a stored timestamp cannot be parsed.
        """
        return cls(
            id=str(record.get("id") or ""),
            title=str(record.get("event_name") or record.get("title") or "").strip() or "Untitled",
            description=record.get("Description", record.get("description")) or None,
            start=parse_instant(record.get("start_datetime")),
            end=parse_instant(record.get("end_datetime")),
            importance=normalize_importance(record.get("importance")),
            is_task=_flag(record.get("is_task")),
            complete=_flag(record.get("complete")),
            archived=_flag(record.get("archived")),
            owner_id=record.get("user_id"),
            created_at=_stamp(record.get("created_at")),
            updated_at=_stamp(record.get("updated_at")),
        )

    def to_payload(self, tz: tzinfo | None = None) -> Dict[str, Any]:
        local_start = to_local(self.start, tz)
        local_end = to_local(self.end, tz)
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "start": format_instant(self.start),
            "end": format_instant(self.end),
            "start_time": local_start.strftime("%H:%M"),
            "end_time": local_end.strftime("%H:%M"),
            "start_date": local_start.date().isoformat(),
            "end_date": local_end.date().isoformat(),
            "importance": self.importance.name,
            "importance_level": int(self.importance),
            "importance_label": display_label(self.importance),
            "color_key": color_key(self.importance),
            "is_task": self.is_task,
            "complete": self.complete,
            "archived": self.archived,
        }


def normalize_records(records: Iterable[Dict[str, Any]]) -> List[CalendarItem]:
    items = []
    for record in records or []:
        try:
            items.append(CalendarItem.from_record(record))
        except InvalidInput as exc:
            logger.warning("Skipping calendar item %s: %s", record.get("id"), exc)
    return items


def sort_by_start(items: Iterable[CalendarItem]) -> List[CalendarItem]:
    return sorted(items, key=lambda item: (item.start, item.end, item.title))
