"""
FlapMyPort endpoint.

Clients talk to a single URL and pick the action with a bare query key:
?review, ?flapchart, ?flaphistory, ?check. Anything else gets the banner.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession
from flapmyport.config import settings
from flapmyport.database import get_db
from flapmyport.schemas.flap import FlapHistoryEntry
from flapmyport.schemas.review import CheckResult
from flapmyport.services.chart_image import render_png
from flapmyport.services.flap_chart import render_chart
from flapmyport.services.flap_store import fetch_port_records, fetch_review_records
from flapmyport.services.query_params import Action, QueryParams, parse_query_params
from flapmyport.services.review import aggregate_review

logger = logging.getLogger(__name__)

router = APIRouter(tags=["FlapMyPort"])

INDEX_MESSAGE = "FlapMyPort API is ready"


def _require_port(request: Request, q: QueryParams) -> None:
    if not q.host:
        msg = "Host not given"
    elif q.if_index == 0:
        msg = "ifIndex not given"
    else:
        return
    logger.warning("%s error: %s", request.url, msg)
    raise HTTPException(status_code=400, detail=msg)


async def review(q: QueryParams, db: AsyncSession) -> JSONResponse:
    records = await fetch_review_records(db, q.start, q.end, q.filter)
    result = aggregate_review(records, q.start, q.end)
    return JSONResponse(content=result.model_dump(mode="json", by_alias=True))


async def flap_history(q: QueryParams, db: AsyncSession) -> JSONResponse:
    records = await fetch_port_records(db, q.start, q.end, q.host, q.if_index)
    return JSONResponse(content=[
        FlapHistoryEntry.from_record(r).model_dump(mode="json", by_alias=True)
        for r in records
    ])


async def flap_chart(q: QueryParams, db: AsyncSession) -> Response:
    records = await fetch_port_records(db, q.start, q.end, q.host, q.if_index)
    colors = render_chart(records, q.start, q.end, settings.FLAP_CHART_WIDTH)
    return Response(content=render_png(colors, settings.FLAP_CHART_HEIGHT), media_type="image/png")


@router.get("/")
async def dispatch(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        q = parse_query_params(request.query_params)
    except ValueError as e:
        logger.warning("%s query error: %s", request.url, e)
        raise HTTPException(status_code=400, detail=str(e))

    logger.debug("/%s requested", q.action.value)

    if q.action is Action.REVIEW:
        return await review(q, db)
    if q.action is Action.FLAP_CHART:
        _require_port(request, q)
        return await flap_chart(q, db)
    if q.action is Action.FLAP_HISTORY:
        _require_port(request, q)
        return await flap_history(q, db)
    if q.action is Action.CHECK:
        return CheckResult().model_dump(by_alias=True)
    return PlainTextResponse(INDEX_MESSAGE)
