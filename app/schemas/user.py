from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class UserBase(BaseModel):
    name: str
    email: str

class UserCreate(BaseModel):
    # 缺欄位由 router 回 400（跟前端原本的訊息一致）
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None

class UserLogin(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None

class UserOut(UserBase):
    id: int
    created_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

class LoginOut(BaseModel):
    message: str
    token: str
    access_token: str
    token_type: str = "bearer"
    user: UserOut
