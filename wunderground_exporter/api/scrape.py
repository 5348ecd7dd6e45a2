from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST

from wunderground_exporter.services.scrape_service import scrape_station
from wunderground_exporter.weather.errors import WeatherFetchError

router = APIRouter(tags=["scrape"])


# Plain ``def``: the upstream call blocks, so FastAPI runs this in its threadpool.
@router.get("/scrape")
def scrape(station_id: str | None = Query(default=None)) -> Response:
    if not station_id or not station_id.strip():
        raise HTTPException(status_code=400, detail="station_id query parameter is required")

    try:
        body = scrape_station(station_id)
    except WeatherFetchError as exc:
        raise HTTPException(status_code=500, detail=f"Failed to fetch weather data: {exc}") from exc

    return Response(content=body, media_type=CONTENT_TYPE_LATEST)
