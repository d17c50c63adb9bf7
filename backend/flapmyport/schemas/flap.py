from enum import Enum
from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime, timezone


class OperStatus(str, Enum):
    UP = "up"
    DOWN = "down"


class FlapRecord(BaseModel):
    """A single observed ifOperStatus transition. Read-only once built."""
    id: int
    # ORM rows carry the converted `time_utc`; plain construction uses `time`
    time: datetime = Field(validation_alias=AliasChoices("time_utc", "time"))
    ipaddress: str
    hostname: Optional[str] = None
    if_index: int
    if_name: Optional[str] = None
    if_alias: Optional[str] = None
    if_oper_status: OperStatus

    model_config = {"from_attributes": True, "frozen": True}

    @field_validator("time")
    @classmethod
    def as_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    @field_validator("if_oper_status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        # The collector stores the trap's raw status; anything but "up" is down.
        if isinstance(v, OperStatus):
            return v
        return OperStatus.UP if str(v).strip().lower() == "up" else OperStatus.DOWN

    @property
    def port_name(self) -> str:
        if self.if_name:
            return self.if_name
        return f"<ifIndex {self.if_index}>"

    @property
    def is_up(self) -> bool:
        return self.if_oper_status is OperStatus.UP


class FlapHistoryEntry(BaseModel):
    time: datetime
    if_oper_status: OperStatus

    model_config = {"alias_generator": to_camel, "populate_by_name": True}

    @classmethod
    def from_record(cls, record: FlapRecord) -> "FlapHistoryEntry":
        return cls(time=record.time, if_oper_status=record.if_oper_status)
