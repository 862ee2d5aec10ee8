from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session, joinedload

from app.config import settings
from app.database import get_db
from app.models.booking import BookingMeeting
from app.models.user import User
from app.schemas.booking import (
    BookingCreate,
    BookingUpdate,
    BookingOut,
    ConflictOut,
    RejectionOut,
)
from app.utils.auth import get_optional_user
from app.utils.booking_validation import (
    BookingCandidate,
    Rejection,
    RejectionKind,
    validate,
)
from app.utils.instants import parse_instant

import logging
logger = logging.getLogger("app.bookings")


router = APIRouter(prefix="/api/bookings", tags=["Bookings"])

REJECTION_STATUS = {
    RejectionKind.MISSING_FIELD: 400,
    RejectionKind.INVALID_ORDER: 400,
    RejectionKind.CONFLICT: 409,
}
REJECTION_MESSAGE = {
    RejectionKind.MISSING_FIELD: "Missing required fields",
    RejectionKind.INVALID_ORDER: "Invalid booking time",
    RejectionKind.CONFLICT: "Time conflict",
}


def _existing_windows(db: Session):
    # 固定用 start_time, id 排序，衝突時回報的那筆才會是確定的
    rows = (
        db.query(BookingMeeting)
        .order_by(BookingMeeting.start_time, BookingMeeting.id)
        .all()
    )
    return [r.window() for r in rows]


def _raise_rejection(rejection: Rejection):
    conflict = None
    if rejection.conflicting_booking is not None:
        b = rejection.conflicting_booking
        conflict = ConflictOut(id=b.id, start_time=b.start, end_time=b.end)

    body = RejectionOut(
        message=REJECTION_MESSAGE[rejection.kind],
        kind=rejection.kind.value,
        errors=rejection.error_map(),
        conflict=conflict,
    )
    logger.info(
        "Booking rejected: %s fields=%s conflict_id=%s",
        rejection.kind.value,
        ",".join(rejection.fields),
        rejection.conflicting_booking_id,
    )
    raise HTTPException(status_code=REJECTION_STATUS[rejection.kind], detail=body.as_detail())


def _get_or_404(db: Session, booking_id: int) -> BookingMeeting:
    booking = (
        db.query(BookingMeeting)
        .options(joinedload(BookingMeeting.user))
        .filter(BookingMeeting.id == booking_id)
        .first()
    )
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


@router.get("", response_model=list[BookingOut])
def list_bookings(
    db: Session = Depends(get_db),
    start: Optional[str] = Query(None, description="只回傳與 [start, end) 重疊的預約"),
    end: Optional[str] = Query(None),
):
    query = db.query(BookingMeeting).options(joinedload(BookingMeeting.user))

    if start is not None:
        window_start = parse_instant(start)
        if window_start is None:
            raise HTTPException(status_code=400, detail="Invalid start")
        query = query.filter(BookingMeeting.end_time > window_start)

    if end is not None:
        window_end = parse_instant(end)
        if window_end is None:
            raise HTTPException(status_code=400, detail="Invalid end")
        query = query.filter(BookingMeeting.start_time < window_end)

    return query.order_by(BookingMeeting.start_time, BookingMeeting.id).all()


@router.get("/{booking_id}", response_model=BookingOut)
def get_booking(booking_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, booking_id)


@router.post("", response_model=BookingOut, status_code=201)
def create_booking(
    body: BookingCreate,
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    candidate = BookingCandidate(
        purpose=body.purpose,
        person_in_charge=body.pic,
        start=body.start_time,
        end=body.end_time,
    )
    result = validate(candidate, _existing_windows(db))
    if isinstance(result, Rejection):
        _raise_rejection(result)

    user_id = current_user.id if current_user else body.user_id
    if user_id is not None and db.get(User, user_id) is None:
        raise HTTPException(status_code=404, detail="User not found")

    booking = BookingMeeting(
        user_id=user_id,
        room_name=(body.room_name or "").strip() or settings.DEFAULT_ROOM_NAME,
        purpose=result.purpose,
        pic=result.person_in_charge,
        start_time=result.start,
        end_time=result.end,
    )
    db.add(booking)
    db.commit()
    logger.info("Created booking id=%s %s -> %s", booking.id, result.start, result.end)
    return _get_or_404(db, booking.id)


@router.put("/{booking_id}", response_model=BookingOut)
def update_booking(booking_id: int, body: BookingUpdate, db: Session = Depends(get_db)):
    booking = _get_or_404(db, booking_id)
    current = booking.window()

    # 拖拉 / 調整長度只會送 startTime、endTime，其餘沿用原值
    candidate = BookingCandidate(
        purpose=body.purpose if body.purpose is not None else booking.purpose,
        person_in_charge=body.pic if body.pic is not None else booking.pic,
        start=body.start_time if body.start_time is not None else current.start,
        end=body.end_time if body.end_time is not None else current.end,
    )
    result = validate(candidate, _existing_windows(db), editing_id=booking.id)
    if isinstance(result, Rejection):
        _raise_rejection(result)

    booking.purpose = result.purpose
    booking.pic = result.person_in_charge
    booking.start_time = result.start
    booking.end_time = result.end
    if body.room_name is not None and body.room_name.strip():
        booking.room_name = body.room_name.strip()

    db.commit()
    logger.info("Updated booking id=%s %s -> %s", booking.id, result.start, result.end)
    return _get_or_404(db, booking.id)


@router.delete("/{booking_id}")
def delete_booking(booking_id: int, db: Session = Depends(get_db)):
    booking = db.query(BookingMeeting).filter(BookingMeeting.id == booking_id).first()
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")

    db.delete(booking)
    db.commit()
    logger.info("Deleted booking id=%s", booking_id)
    return {"message": "Booking deleted successfully"}
