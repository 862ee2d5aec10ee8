from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
from app.utils.conflict import BookingWindow
from app.utils.instants import as_stored_utc


class BookingMeeting(Base):
    __tablename__ = "booking_meetings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    room_name = Column(String(100), nullable=False, default="Default Room")

    purpose = Column(Text, nullable=False)
    # person in charge
    pic = Column(String(100), nullable=False)

    # 一律存 UTC
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    user = relationship("User", back_populates="bookings")

    def window(self) -> BookingWindow:
        return BookingWindow(
            id=self.id,
            start=as_stored_utc(self.start_time),
            end=as_stored_utc(self.end_time),
        )
