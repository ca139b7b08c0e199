"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import PlainTextResponse

from app.schemas import ChartDataResponse
from services.errors import ReadingValidationError, RenderError, StoreError
from services.pipeline import ReadingService, build_default_service

NO_DATA = "No data available"

router = APIRouter()


def get_service() -> ReadingService:
    return build_default_service()


def server_error(exc: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=str(exc),
    )


def format_age(seconds: float) -> str:
    total = max(int(seconds), 0)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


@router.api_route(
    "/pushtemp",
    methods=["GET", "POST"],
    response_class=PlainTextResponse,
    summary="Store a reading stamped with the current time.",
)
def push_reading(
    inside: Optional[str] = Query(None, description="Indoor temperature, °C."),
    outside: Optional[str] = Query(None, description="Outdoor temperature, °C."),
    humidity: Optional[str] = Query(None, description="Relative humidity, %."),
    service: ReadingService = Depends(get_service),
) -> str:
    try:
        service.ingest(inside, outside, humidity)
    except ReadingValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except StoreError as exc:
        raise server_error(exc) from exc
    return "Data added"


@router.get(
    "/gettemp",
    response_class=PlainTextResponse,
    summary="Dump retained raw values, one space separated series per line.",
)
def dump_readings(service: ReadingService = Depends(get_service)) -> str:
    try:
        dump = service.raw_dump()
    except StoreError as exc:
        raise server_error(exc) from exc
    return dump if dump is not None else NO_DATA


@router.api_route(
    "/resettemp",
    methods=["GET", "POST"],
    response_class=PlainTextResponse,
    summary="Drop every stored reading.",
)
def reset_readings(service: ReadingService = Depends(get_service)) -> str:
    try:
        service.reset_all()
    except StoreError as exc:
        raise server_error(exc) from exc
    return "Drop ok"


@router.get(
    "/lastupdate",
    response_class=PlainTextResponse,
    summary="Time elapsed since the newest stored reading.",
)
def last_update(service: ReadingService = Depends(get_service)) -> str:
    try:
        age = service.last_update_age()
    except StoreError as exc:
        raise server_error(exc) from exc
    if age is None:
        return NO_DATA
    return f"Last update was {format_age(age.total_seconds())} before"


@router.get(
    "/chart/data",
    response_model=ChartDataResponse,
    summary="Series and axis bounds behind the rendered chart.",
)
def chart_data(service: ReadingService = Depends(get_service)) -> ChartDataResponse:
    try:
        dataset = service.chart_dataset()
    except (StoreError, RenderError) as exc:
        raise server_error(exc) from exc
    if dataset is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NO_DATA)
    return ChartDataResponse.from_dataset(dataset)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
