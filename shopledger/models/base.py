from datetime import datetime, timezone
from typing import Any

from bson import ObjectId
from pydantic import BaseModel, Field, ConfigDict

from shopledger.utils.currency import to_number


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(ObjectId())


def coerce_money(value: Any) -> float:
    """Field validator: stored money never fails to load, junk reads as 0."""
    return to_number(value)


class MongoModel(BaseModel):
    id: str = Field(default_factory=new_id, alias="_id")
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True
    )

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, mode="python")

    def touched(self, **changes) -> "MongoModel":
        """Copy with changes applied and updated_at bumped."""
        changes["updated_at"] = _utcnow()
        return self.model_copy(update=changes)
