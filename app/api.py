"""HTTP route definitions for the service."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import PlainTextResponse

from app.schemas import GnssCoordinate, GnssRow
from datastore.base import StoreError
from services.query_service import GnssQueryService, build_default_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")
health_router = APIRouter()


def get_service() -> GnssQueryService:
    return build_default_service()


def _store_failure(message: str, **context: Any) -> PlainTextResponse:
    logger.exception(message, extra=context)
    return PlainTextResponse(message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.get(
    "/gnss5",
    response_model=List[GnssRow],
    summary="Latest raw reading per channel for stations GNSS1-GNSS5.",
)
def latest_snapshot(service: GnssQueryService = Depends(get_service)) -> Any:
    try:
        readings = service.latest_snapshot()
    except StoreError:
        return _store_failure("Error querying GNSS data")
    return [GnssRow.from_reading(reading) for reading in readings]


@router.get(
    "/gnss-coords",
    response_model=List[GnssCoordinate],
    summary="Decoded decimal-degree coordinates per station.",
)
def coordinates(service: GnssQueryService = Depends(get_service)) -> Any:
    try:
        coords = service.coordinates()
    except StoreError:
        return _store_failure("Error fetching coordinates")
    return [GnssCoordinate.from_coordinate(coordinate) for coordinate in coords]


@router.get(
    "/gnss_ids",
    response_model=List[str],
    summary="Distinct station identifiers.",
)
def station_ids(service: GnssQueryService = Depends(get_service)) -> Any:
    try:
        return service.station_ids()
    except StoreError:
        return _store_failure("Error fetching GNSS IDs")


@router.get(
    "/sensors/{gnss_id}",
    response_model=List[str],
    summary="Channel identifiers of a station matching the sensor id shape.",
)
def channel_ids(gnss_id: str, service: GnssQueryService = Depends(get_service)) -> Any:
    try:
        return service.channel_ids(gnss_id)
    except StoreError:
        return _store_failure("Error fetching sensor IDs", station_id=gnss_id)


@router.get(
    "/gnss-detail",
    response_model=List[GnssRow],
    summary="Raw readings of one channel, ascending by timestamp.",
)
def channel_detail(
    gnss_id: str = Query(..., alias="gnssId"),
    sensor_id: str = Query(..., alias="sensorId"),
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    service: GnssQueryService = Depends(get_service),
) -> Any:
    try:
        readings = service.detail(gnss_id, sensor_id, start=start_date, end=end_date)
    except StoreError:
        return _store_failure(
            "Error fetching GNSS detail data",
            station_id=gnss_id,
            channel_id=sensor_id,
            start=start_date,
            end=end_date,
        )
    return [GnssRow.from_reading(reading) for reading in readings]


@health_router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
