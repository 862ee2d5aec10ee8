"""In-memory calendar state for the client-only variant.

State is an immutable, start-ordered tuple of bookings. Changes go through
``apply(state, command)``, which validates creates and updates first and
returns a new state; the state passed in is never modified.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Optional, Tuple, Union

from app.utils.booking_validation import (
    BookingCandidate,
    Rejection,
    ValidatedBooking,
    validate,
)
from app.utils.conflict import BookingWindow


@dataclass(frozen=True)
class CalendarBooking:
    id: str
    purpose: str
    person_in_charge: str
    start: datetime
    end: datetime

    def window(self) -> BookingWindow:
        return BookingWindow(id=self.id, start=self.start, end=self.end)


@dataclass(frozen=True)
class CalendarState:
    bookings: Tuple[CalendarBooking, ...] = ()

    def get(self, booking_id: str) -> Optional[CalendarBooking]:
        for b in self.bookings:
            if b.id == booking_id:
                return b
        return None

    def windows(self) -> Tuple[BookingWindow, ...]:
        return tuple(b.window() for b in self.bookings)


@dataclass(frozen=True)
class CreateBooking:
    purpose: Optional[str] = None
    person_in_charge: Optional[str] = None
    start: Any = None
    end: Any = None


@dataclass(frozen=True)
class UpdateBooking:
    # None = 沿用原本的值（拖拉 / 調整長度只會送 start、end）
    booking_id: str
    purpose: Optional[str] = None
    person_in_charge: Optional[str] = None
    start: Any = None
    end: Any = None


@dataclass(frozen=True)
class DeleteBooking:
    booking_id: str


Command = Union[CreateBooking, UpdateBooking, DeleteBooking]


@dataclass(frozen=True)
class Applied:
    booking: CalendarBooking


@dataclass(frozen=True)
class NotFound:
    booking_id: str


Outcome = Union[Applied, Rejection, NotFound]


def new_booking_id() -> str:
    return f"booking-{uuid.uuid4().hex}"


def _sorted(bookings) -> Tuple[CalendarBooking, ...]:
    return tuple(sorted(bookings, key=lambda b: (b.start, b.end, b.id)))


def _from_validated(booking_id: str, v: ValidatedBooking) -> CalendarBooking:
    return CalendarBooking(
        id=booking_id,
        purpose=v.purpose,
        person_in_charge=v.person_in_charge,
        start=v.start,
        end=v.end,
    )


def _pick(new, old):
    return old if new is None else new


def apply(state: CalendarState, command: Command) -> Tuple[CalendarState, Outcome]:
    if isinstance(command, CreateBooking):
        candidate = BookingCandidate(
            purpose=command.purpose,
            person_in_charge=command.person_in_charge,
            start=command.start,
            end=command.end,
        )
        result = validate(candidate, state.windows())
        if isinstance(result, Rejection):
            return state, result

        booking = _from_validated(new_booking_id(), result)
        return replace(state, bookings=_sorted(state.bookings + (booking,))), Applied(booking)

    if isinstance(command, UpdateBooking):
        current = state.get(command.booking_id)
        if current is None:
            return state, NotFound(command.booking_id)

        candidate = BookingCandidate(
            purpose=_pick(command.purpose, current.purpose),
            person_in_charge=_pick(command.person_in_charge, current.person_in_charge),
            start=_pick(command.start, current.start),
            end=_pick(command.end, current.end),
        )
        result = validate(candidate, state.windows(), editing_id=current.id)
        if isinstance(result, Rejection):
            return state, result

        booking = _from_validated(current.id, result)
        others = [b for b in state.bookings if b.id != current.id]
        return replace(state, bookings=_sorted(others + [booking])), Applied(booking)

    if isinstance(command, DeleteBooking):
        current = state.get(command.booking_id)
        if current is None:
            return state, NotFound(command.booking_id)
        remaining = tuple(b for b in state.bookings if b.id != current.id)
        return replace(state, bookings=remaining), Applied(current)

    raise TypeError(f"Unknown calendar command: {command!r}")
