from __future__ import annotations

from typing import Optional, List, Dict, Any, Union

from pydantic import BaseModel, Field

ImportanceInput = Union[int, str]


class ItemCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    start_date: str
    start_time: str
    end_date: str
    end_time: str
    importance: Optional[ImportanceInput] = "NONE"
    is_task: bool = False
    complete: bool = False
    utc_offset_minutes: Optional[int] = None


class ItemPatch(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[str] = None
    start_time: Optional[str] = None
    end_date: Optional[str] = None
    end_time: Optional[str] = None
    importance: Optional[ImportanceInput] = None
    is_task: Optional[bool] = None
    complete: Optional[bool] = None
    archived: Optional[bool] = None
    utc_offset_minutes: Optional[int] = None


class CompletePayload(BaseModel):
    complete: bool


class ItemRecord(BaseModel):
    id: str
    user_id: str
    event_name: str
    Description: Optional[str] = None
    start_datetime: str
    end_datetime: str
    importance: Optional[ImportanceInput] = None
    is_task: bool = False
    complete: bool = False
    archived: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class ItemFormResponse(BaseModel):
    id: str
    title: str
    description: str
    start_date: str
    start_time: str
    end_date: str
    end_time: str
    importance: str
    is_task: bool


class ItemsResponse(BaseModel):
    items: List[Dict[str, Any]]


class MonthViewResponse(BaseModel):
    month: str
    label: str
    weekday_labels: List[str]
    weeks: List[List[Dict[str, Any]]]
    total_items: int


class WeekViewResponse(BaseModel):
    anchor: str
    label: str
    hour_labels: List[str]
    hour_row_height_px: int
    days: List[Dict[str, Any]]


class TaskWeekResponse(BaseModel):
    anchor: str
    offset: int
    label: str
    days: List[Dict[str, Any]]
