from flapmyport.schemas.flap import OperStatus, FlapRecord, FlapHistoryEntry
from flapmyport.schemas.review import PortSummary, HostSummary, ReviewParams, ReviewResult, CheckResult

__all__ = [
    "OperStatus", "FlapRecord", "FlapHistoryEntry",
    "PortSummary", "HostSummary", "ReviewParams", "ReviewResult", "CheckResult",
]
