# app/utils/conflict.py
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Hashable, Iterable, Optional

from app.utils.instants import as_stored_utc


@dataclass(frozen=True)
class BookingWindow:
    """
    已存在的預約（只保留衝突檢查需要的欄位）。
    start / end 跟 DB 一樣以 UTC 為準：naive datetime 一律視為 UTC。
    """
    id: Hashable
    start: datetime
    end: datetime


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    # 半開區間 [start, end)：頭尾相接不算重疊
    return a_start < b_end and a_end > b_start


def find_conflict(
    start: datetime,
    end: datetime,
    existing: Iterable[BookingWindow],
    editing_id: Optional[Any] = None,
) -> Optional[BookingWindow]:
    """
    依 existing 的順序掃描，回傳第一筆與 [start, end) 重疊的預約。
    editing_id 對應的那筆（正在編輯的自己）不列入比較。
    """
    for b in existing:
        if editing_id is not None and b.id == editing_id:
            continue
        if overlaps(start, end, as_stored_utc(b.start), as_stored_utc(b.end)):
            return b
    return None
