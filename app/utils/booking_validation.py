# app/utils/booking_validation.py
# 新增 / 修改預約前的檢查：必填欄位 -> start < end -> 與既有預約衝突
# 檢查失敗回傳 Rejection（不丟例外），呼叫端自己決定怎麼回應
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Hashable, Iterable, Optional, Tuple, Union

from app.utils.conflict import BookingWindow, find_conflict
from app.utils.instants import parse_instant

# 前端表單的欄位名稱
FIELDS = ("purpose", "person_in_charge", "start", "end")

REQUIRED_MESSAGES = {
    "purpose": "Purpose is required",
    "person_in_charge": "Person in charge is required",
    "start": "Start time is required",
    "end": "End time is required",
}
INVALID_ORDER_MESSAGE = "start must be before end"
CONFLICT_MESSAGE = "This time slot overlaps an existing booking"


class RejectionKind(str, Enum):
    MISSING_FIELD = "missing_field"
    INVALID_ORDER = "invalid_order"
    CONFLICT = "conflict"


@dataclass(frozen=True)
class BookingCandidate:
    # 表單 / request body 送來的原始值，還沒檢查
    purpose: Optional[str] = None
    person_in_charge: Optional[str] = None
    start: Any = None
    end: Any = None


@dataclass(frozen=True)
class ValidatedBooking:
    purpose: str
    person_in_charge: str
    start: datetime
    end: datetime


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass(frozen=True)
class Rejection:
    kind: RejectionKind
    errors: Tuple[FieldError, ...]
    conflicting_booking: Optional[BookingWindow] = None

    @property
    def fields(self):
        return tuple(e.field for e in self.errors)

    @property
    def conflicting_booking_id(self):
        if self.conflicting_booking is None:
            return None
        return self.conflicting_booking.id

    def error_map(self):
        return {e.field: e.message for e in self.errors}


ValidationResult = Union[ValidatedBooking, Rejection]


@dataclass(frozen=True)
class _Parsed:
    purpose: Optional[str]
    person_in_charge: Optional[str]
    start: Optional[datetime]
    end: Optional[datetime]
    missing: Tuple[str, ...]


def _clean_text(value):
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _parse(candidate):
    purpose = _clean_text(candidate.purpose)
    pic = _clean_text(candidate.person_in_charge)
    start = parse_instant(candidate.start)
    end = parse_instant(candidate.end)

    values = {"purpose": purpose, "person_in_charge": pic, "start": start, "end": end}
    missing = tuple(name for name in FIELDS if values[name] is None)
    return _Parsed(purpose, pic, start, end, missing)


def _both_times(kind, message, conflict=None):
    errors = (FieldError("start", message), FieldError("end", message))
    return Rejection(kind=kind, errors=errors, conflicting_booking=conflict)


def validate(
    candidate: BookingCandidate,
    existing_bookings: Iterable[BookingWindow],
    editing_id: Optional[Hashable] = None,
) -> ValidationResult:
    """
    existing_bookings 依傳入順序掃描，回報第一筆衝突（呼叫端請先依 start 排序）。
    editing_id：正在編輯的那筆，不跟自己比。
    """
    parsed = _parse(candidate)

    # 1) 必填欄位：有缺就直接結束，不做衝突掃描
    if parsed.missing:
        errors = tuple(FieldError(name, REQUIRED_MESSAGES[name]) for name in parsed.missing)
        return Rejection(kind=RejectionKind.MISSING_FIELD, errors=errors)

    # 2) start 必須嚴格小於 end（長度為 0 也不行）
    if not parsed.start < parsed.end:
        return _both_times(RejectionKind.INVALID_ORDER, INVALID_ORDER_MESSAGE)

    # 3) 與既有預約比對
    conflict = find_conflict(parsed.start, parsed.end, existing_bookings, editing_id)
    if conflict is not None:
        return _both_times(RejectionKind.CONFLICT, CONFLICT_MESSAGE, conflict)

    return ValidatedBooking(
        purpose=parsed.purpose,
        person_in_charge=parsed.person_in_charge,
        start=parsed.start,
        end=parsed.end,
    )
