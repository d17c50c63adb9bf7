"""
Flap store — reads the collector's `ports` table and hands back ordered
FlapRecord lists ready for aggregation or charting.
"""
import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy import select, and_, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from flapmyport.config import settings
from flapmyport.models.port_flap import PortFlap
from flapmyport.schemas.flap import FlapRecord
from flapmyport.services.query_params import KeywordFilter

logger = logging.getLogger(__name__)


def window_conditions(start: datetime, end: datetime) -> list:
    return [
        PortFlap.time_utc >= start,
        PortFlap.time_utc <= end,
        # skip sub-interfaces (Gi0/1.100); unnamed ports stay and get "<ifIndex N>"
        or_(PortFlap.if_name.is_(None), ~PortFlap.if_name.contains(".")),
    ]


def filter_conditions(keyword_filter: Optional[KeywordFilter]) -> list:
    """Keywords match hostname, address or alias as substrings."""
    if keyword_filter is None:
        return []
    conditions = []
    for keyword in keyword_filter.include:
        conditions.append(or_(
            PortFlap.hostname.contains(keyword, autoescape=True),
            PortFlap.ipaddress.contains(keyword, autoescape=True),
            PortFlap.if_alias.contains(keyword, autoescape=True),
        ))
    for keyword in keyword_filter.exclude:
        conditions.append(and_(*(
            or_(column.is_(None), ~column.contains(keyword, autoescape=True))
            for column in (PortFlap.hostname, PortFlap.ipaddress, PortFlap.if_alias)
        )))
    return conditions


def _ordered(query):
    return query.order_by(
        PortFlap.ipaddress,
        PortFlap.if_index,
        PortFlap.time.asc(),
        PortFlap.timeticks.asc(),
    )


async def _fetch(db: AsyncSession, query) -> List[FlapRecord]:
    try:
        result = await db.execute(query)
        rows = result.scalars().all()
    except SQLAlchemyError as e:
        logger.error("Unable to query flaps: %s", e)
        await db.rollback()
        return []
    return [FlapRecord.model_validate(row) for row in rows]


async def fetch_review_records(
    db: AsyncSession,
    start: datetime,
    end: datetime,
    keyword_filter: Optional[KeywordFilter] = None,
) -> List[FlapRecord]:
    query = _ordered(
        select(PortFlap).where(
            *window_conditions(start, end),
            *filter_conditions(keyword_filter),
        )
    ).limit(settings.SQL_ROWS_LIMIT)
    return await _fetch(db, query)


async def fetch_port_records(
    db: AsyncSession,
    start: datetime,
    end: datetime,
    ipaddress: str,
    if_index: int,
) -> List[FlapRecord]:
    query = _ordered(
        select(PortFlap).where(
            *window_conditions(start, end),
            PortFlap.ipaddress == ipaddress,
            PortFlap.if_index == if_index,
        )
    ).limit(settings.PORT_FLAPS_LIMIT)
    return await _fetch(db, query)
