"""
Flap chart — squeezes a port's flap history into a fixed number of time
buckets and resolves each bucket to a color.

    start                                            end
      |  0  |  1  |  2  | ...                | width-1 |
      unit = (end - start) / (width - 1)

Buckets that saw no flap inherit the last known port status, so a port that
went down and stayed down reads as a solid pale-red run after the red mark.
"""
import calendar
from datetime import datetime
from enum import Enum
from typing import List, Sequence
from flapmyport.schemas.flap import FlapRecord


class TimelineBucket(Enum):
    UNKNOWN = 0
    UP = 1
    DOWN = 2
    FLAPPING_UP = 3
    FLAPPING_DOWN = 4


class CarryStatus(Enum):
    UNKNOWN = 0
    UP = 1
    DOWN = 2


class ChartColor(Enum):
    UP = (10, 178, 38, 255)
    UP_STATE = (125, 212, 139, 255)
    DOWN = (212, 57, 57, 255)
    DOWN_STATE = (239, 106, 106, 255)
    FLAPPING = (255, 128, 0, 255)
    UNKNOWN = (200, 200, 200, 255)

    @property
    def rgba(self):
        return self.value


# bucket -> (column color, status carried to the right)
_BUCKET_PAINT = {
    TimelineBucket.UP: (ChartColor.UP, CarryStatus.UP),
    TimelineBucket.DOWN: (ChartColor.DOWN, CarryStatus.DOWN),
    TimelineBucket.FLAPPING_UP: (ChartColor.FLAPPING, CarryStatus.UP),
    TimelineBucket.FLAPPING_DOWN: (ChartColor.FLAPPING, CarryStatus.DOWN),
}

_STATE_COLOR = {
    CarryStatus.UNKNOWN: ChartColor.UNKNOWN,
    CarryStatus.UP: ChartColor.UP_STATE,
    CarryStatus.DOWN: ChartColor.DOWN_STATE,
}


def _epoch(moment: datetime) -> int:
    """Whole UTC seconds; naive datetimes are taken as UTC."""
    return calendar.timegm(moment.utctimetuple())


def bucket_index(moment: datetime, start: datetime, interval_seconds: int, width: int) -> int:
    """floor(offset / unit) with unit = interval / (width - 1), clamped to the chart."""
    if interval_seconds <= 0:
        return 0
    # integer form of offset / unit: moment == end lands exactly on width - 1
    x = (_epoch(moment) - _epoch(start)) * (width - 1) // interval_seconds
    return min(max(x, 0), width - 1)


def classify_buckets(
    records: Sequence[FlapRecord],
    start: datetime,
    end: datetime,
    width: int,
) -> List[TimelineBucket]:
    """
    A bucket's first flap marks it UP or DOWN; any further flap in the same
    bucket marks it FLAPPING_UP or FLAPPING_DOWN by that flap's own status,
    even when the status did not actually change.
    """
    timeline = [TimelineBucket.UNKNOWN] * width
    interval_seconds = _epoch(end) - _epoch(start)

    for record in records:
        x = bucket_index(record.time, start, interval_seconds, width)
        if timeline[x] is TimelineBucket.UNKNOWN:
            timeline[x] = TimelineBucket.UP if record.is_up else TimelineBucket.DOWN
        else:
            timeline[x] = TimelineBucket.FLAPPING_UP if record.is_up else TimelineBucket.FLAPPING_DOWN

    return timeline


def initial_status(records: Sequence[FlapRecord]) -> CarryStatus:
    """Status assumed before the first flap: the opposite of what it reported."""
    if not records:
        return CarryStatus.UNKNOWN
    return CarryStatus.DOWN if records[0].is_up else CarryStatus.UP


def render_chart(
    records: Sequence[FlapRecord],
    start: datetime,
    end: datetime,
    width: int,
) -> List[ChartColor]:
    """Return exactly `width` colors, left (start) to right (end).

    `records` must belong to a single port, be time-ordered and fall within
    [start, end]. `width` must be at least 2.
    """
    records = list(records)
    status = initial_status(records)
    colors: List[ChartColor] = []

    for bucket in classify_buckets(records, start, end, width):
        if bucket is TimelineBucket.UNKNOWN:
            colors.append(_STATE_COLOR[status])
        else:
            color, status = _BUCKET_PAINT[bucket]
            colors.append(color)

    return colors
