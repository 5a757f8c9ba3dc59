import logging

from apscheduler.schedulers.background import BackgroundScheduler

from recordindex.errors import SourceUnavailableError
from recordindex.loader import CatalogLoader


logger = logging.getLogger(__name__)


def _reload_catalog(loader: CatalogLoader) -> None:
    try:
        report = loader.run()
    except SourceUnavailableError as exc:
        # The previous index keeps serving lookups.
        logger.error("scheduled reload failed", extra={"source": exc.source, "reason": exc.reason})
        return
    logger.info(
        "scheduled reload completed",
        extra={
            "source": report.source,
            "records_stored": report.records_stored,
            "parse_failures": report.parse_failures,
        },
    )


def start_reload_scheduler(loader: CatalogLoader, interval_minutes: float) -> BackgroundScheduler:
    if interval_minutes <= 0:
        raise ValueError("interval_minutes must be positive")

    scheduler = BackgroundScheduler(timezone="UTC")
    scheduler.add_job(
        _reload_catalog,
        "interval",
        args=[loader],
        minutes=interval_minutes,
        id="reload_catalog",
        replace_existing=True,
    )

    logger.info("reload scheduler started", extra={"interval_minutes": interval_minutes})
    scheduler.start()
    return scheduler
