"""
Review aggregation — folds an ordered stream of flap records into a
host → port summary tree for one time window.
"""
from datetime import datetime
from typing import Iterable, List, Optional
from flapmyport.schemas.flap import FlapRecord
from flapmyport.schemas.review import HostSummary, PortSummary, ReviewParams, ReviewResult


def new_port(record: FlapRecord) -> PortSummary:
    return PortSummary(
        if_index=record.if_index,
        if_name=record.port_name,
        if_alias=record.if_alias or "",
        if_oper_status=record.if_oper_status,
        flap_count=1,
        first_flap_time=record.time,
        last_flap_time=record.time,
    )


def update_port(port: PortSummary, record: FlapRecord) -> None:
    port.flap_count += 1
    if record.if_alias:
        port.if_alias = record.if_alias
    port.if_oper_status = record.if_oper_status

    # Rows arrive time-ascending per port, so in practice only the elif fires.
    if record.time < port.first_flap_time:
        port.first_flap_time = record.time
    elif record.time > port.last_flap_time:
        port.last_flap_time = record.time


def new_host(record: FlapRecord) -> HostSummary:
    return HostSummary(
        name=record.hostname or "",
        ipaddress=record.ipaddress,
        ports=[new_port(record)],
    )


def update_host(host: HostSummary, record: FlapRecord) -> None:
    host.name = record.hostname or ""
    for port in host.ports:
        if port.if_index == record.if_index:
            update_port(port, record)
            return
    host.ports.append(new_port(record))


def aggregate_review(records: Iterable[FlapRecord], start: datetime, end: datetime) -> ReviewResult:
    """
    Build the review tree in a single pass.

    Records must be sorted by (ipaddress, if_index, time). A host ends as soon
    as the address changes: if the same address shows up again later it gets
    a second HostSummary, nothing is merged back.
    """
    params = ReviewParams(time_start=start, time_end=end)
    hosts: List[HostSummary] = []
    current: Optional[HostSummary] = None

    for record in records:
        if params.first_flap_time is None:
            params.oldest_flap_id = record.id
            params.first_flap_time = record.time
        params.last_flap_time = record.time

        if current is None:
            current = new_host(record)
        elif current.ipaddress == record.ipaddress:
            update_host(current, record)
        else:
            hosts.append(current)
            current = new_host(record)

    if current is not None:
        hosts.append(current)

    return ReviewResult(params=params, hosts=hosts)
