from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime
from flapmyport.schemas.flap import OperStatus

# FlapMyPort clients expect camelCase keys.
_camel = {"alias_generator": to_camel, "populate_by_name": True}


class PortSummary(BaseModel):
    if_index: int
    if_name: str
    if_alias: str = ""
    if_oper_status: OperStatus
    flap_count: int = 1
    first_flap_time: datetime
    last_flap_time: datetime
    is_blacklisted: bool = False  # reserved, nothing sets it yet

    model_config = _camel


class HostSummary(BaseModel):
    name: str = ""
    ipaddress: str
    ports: List[PortSummary] = []

    model_config = _camel


class ReviewParams(BaseModel):
    time_start: datetime
    time_end: datetime
    first_flap_time: Optional[datetime] = None
    last_flap_time: Optional[datetime] = None
    # 0 rather than null when there are no flaps; older clients crash on null
    oldest_flap_id: int = Field(0, alias="oldestFlapID")

    model_config = _camel


class ReviewResult(BaseModel):
    params: ReviewParams
    hosts: List[HostSummary] = []

    model_config = _camel


class CheckResult(BaseModel):
    check_result: str = "flapmyport"

    model_config = _camel
