from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from app.schemas.user import UserOut
from app.utils.instants import as_stored_utc


class CamelModel(BaseModel):
    # 前端用 camelCase，snake_case 也收
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookingCreate(CamelModel):
    # 時間先收字串，格式錯誤由 validator 回欄位錯誤，而不是 pydantic 422
    purpose: Optional[str] = None
    pic: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("pic", "personInCharge", "person_in_charge"),
    )
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    room_name: Optional[str] = None
    user_id: Optional[int] = None


class BookingUpdate(CamelModel):
    purpose: Optional[str] = None
    pic: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("pic", "personInCharge", "person_in_charge"),
    )
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    room_name: Optional[str] = None


class BookingOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    purpose: str
    pic: str
    room_name: str
    start_time: datetime
    end_time: datetime
    user_id: Optional[int] = None
    user: Optional[UserOut] = None
    created_at: Optional[datetime] = None

    @field_serializer("start_time", "end_time")
    def serialize_times(self, dt: datetime) -> datetime:
        return as_stored_utc(dt)


class ConflictOut(CamelModel):
    id: int
    start_time: datetime
    end_time: datetime


class RejectionOut(BaseModel):
    message: str
    kind: str
    errors: Dict[str, str]
    conflict: Optional[ConflictOut] = None

    def as_detail(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
