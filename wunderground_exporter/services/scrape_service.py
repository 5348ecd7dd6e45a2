from __future__ import annotations

import logging

from wunderground_exporter.weather import fetcher, gauges

logger = logging.getLogger(__name__)


def scrape_station(station_id: str) -> bytes:
    obs = fetcher.fetch(station_id)
    if obs.station_id != station_id:
        logger.info("scrape.station_mismatch", extra={"station_id": station_id, "reported_station_id": obs.station_id})

    body = gauges.render(station_id, obs)
    logger.info("scrape.rendered", extra={"station_id": station_id, "sensors": len(obs.sensors)})
    return body
