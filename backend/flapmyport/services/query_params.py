"""
Request parameter parsing for the FlapMyPort endpoint.

    /?review&start=2024-05-01 10:00:00&end=2024-05-01 11:00:00&filter=core !lab
    /?flapchart&host=10.0.0.1&ifindex=12&interval=86400
"""
import logging
from datetime import datetime, timedelta, timezone
from enum import Enum
from pydantic import BaseModel
from typing import List, Mapping, Optional
from flapmyport.config import settings

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class Action(str, Enum):
    INDEX = "index"
    CHECK = "check"
    REVIEW = "review"
    FLAP_HISTORY = "flaphistory"
    FLAP_CHART = "flapchart"


# When several actions are given the last one listed here wins.
_ACTION_ORDER = [Action.CHECK, Action.REVIEW, Action.FLAP_HISTORY, Action.FLAP_CHART]


class KeywordFilter(BaseModel):
    include: List[str] = []
    exclude: List[str] = []


class QueryParams(BaseModel):
    action: Action = Action.INDEX
    if_index: int = 0
    host: str = ""
    start: datetime
    end: datetime
    filter: KeywordFilter = KeywordFilter()


def parse_filter(raw: Optional[str]) -> KeywordFilter:
    """`core !lab` keeps rows mentioning "core" and drops rows mentioning "lab"."""
    result = KeywordFilter()
    if not raw:
        return result
    for keyword in raw.split():
        if keyword.startswith("!"):
            if len(keyword) < 2:
                continue
            result.exclude.append(keyword[1:])
        else:
            result.include.append(keyword)
    return result


def parse_time(value: str) -> datetime:
    return datetime.strptime(value, TIME_FORMAT).replace(tzinfo=timezone.utc)


def _first(query: Mapping[str, str], key: str, default=None):
    """First value of a repeated key (`?host=a&host=b` gives "a")."""
    getlist = getattr(query, "getlist", None)
    if getlist is None:
        return query.get(key, default)
    values = getlist(key)
    return values[0] if values else default


def parse_query_params(query: Mapping[str, str], now: Optional[datetime] = None) -> QueryParams:
    """Raises ValueError for an unparseable start or end time."""
    now = now or datetime.now(timezone.utc)
    start = now - timedelta(seconds=settings.DEFAULT_REVIEW_INTERVAL_SECONDS)
    end = now

    action = Action.INDEX
    for candidate in _ACTION_ORDER:
        if candidate.value in query:
            action = candidate

    try:
        if_index = int(_first(query, "ifindex", 0))
    except (TypeError, ValueError):
        if_index = 0

    start_str = _first(query, "start")
    if start_str:
        try:
            start = parse_time(start_str)
        except ValueError as e:
            raise ValueError(f"invalid start time: {e}") from e

    end_str = _first(query, "end")
    if end_str:
        try:
            end = parse_time(end_str)
        except ValueError as e:
            raise ValueError(f"invalid end time: {e}") from e

    # interval overrides start/end
    interval_str = _first(query, "interval")
    if interval_str is not None:
        try:
            interval = int(interval_str)
        except ValueError:
            logger.debug("Ignoring non-numeric interval %r", interval_str)
        else:
            end = now
            start = end - timedelta(seconds=interval)

    return QueryParams(
        action=action,
        if_index=if_index,
        host=_first(query, "host", ""),
        start=start,
        end=end,
        filter=parse_filter(_first(query, "filter")),
    )
