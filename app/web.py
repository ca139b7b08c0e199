from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from app.api import NO_DATA, get_service, server_error
from services.errors import RenderError, StoreError
from services.pipeline import ReadingService


router = APIRouter(include_in_schema=False)


@router.get("/", name="chart_page", response_class=HTMLResponse)
def chart_page(service: ReadingService = Depends(get_service)) -> Response:
    try:
        html = service.render_chart()
    except (StoreError, RenderError) as exc:
        raise server_error(exc) from exc
    if html is None:
        return PlainTextResponse(NO_DATA)
    return HTMLResponse(html)
