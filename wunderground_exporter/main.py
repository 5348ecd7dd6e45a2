import structlog
import uvicorn
from fastapi import FastAPI

from wunderground_exporter import __version__
from wunderground_exporter.api.metrics import router as metrics_router
from wunderground_exporter.api.scrape import router as scrape_router
from wunderground_exporter.config import get_settings
from wunderground_exporter.observability.logging import configure_logging
from wunderground_exporter.observability.metrics import get_metrics
from wunderground_exporter.observability.middleware import RequestContextMiddleware


app = FastAPI(title="Wunderground Exporter", version=__version__)
app.add_middleware(RequestContextMiddleware)
app.include_router(scrape_router)
app.include_router(metrics_router)


@app.on_event("startup")
def _startup() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    get_metrics()
    if not settings.wu_api_key:
        structlog.get_logger("startup").warning("missing_api_key", env="WU_API_KEY")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


def run(host: str | None = None, port: int | None = None) -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    host = host or settings.host
    port = port or settings.port
    structlog.get_logger("startup").info("listening", host=host, port=port)
    uvicorn.run(app, host=host, port=port, log_config=None)
