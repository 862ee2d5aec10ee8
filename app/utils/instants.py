from datetime import datetime, timezone
from typing import Any, Optional


def to_utc(dt: datetime) -> datetime:
    """
    naive datetime 視為伺服器本地時間（等同瀏覽器 datetime-local 的值），
    aware datetime 直接換算成 UTC。
    """
    return dt.astimezone(timezone.utc)


def parse_instant(value: Any) -> Optional[datetime]:
    """
    "2025-01-06T10:00"        -> 本地時間換算 UTC
    "2025-01-06T10:00:00Z"    -> UTC
    "2025-01-06T10:00+07:00"  -> UTC
    空字串 / None / 格式錯誤  -> None
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(s)
        except ValueError:
            return None
    else:
        return None

    # 0001-01-01 / 9999-12-31 附近換算 UTC 會超出範圍
    try:
        return to_utc(dt)
    except (OverflowError, ValueError):
        return None


def as_stored_utc(dt: Optional[datetime]) -> Optional[datetime]:
    # DB 一律存 UTC；sqlite 讀回來會掉 tzinfo
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
