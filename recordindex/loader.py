import logging

from sqlalchemy.orm import Session, sessionmaker

from recordindex.config import Settings
from recordindex.errors import SourceUnavailableError
from recordindex.ledger import create_load_run, mark_load_failed, mark_load_succeeded, store_load_failures
from recordindex.parser import RecordParser
from recordindex.record_store import RecordStore
from recordindex.schemas import LoadReport, RecordLayout


logger = logging.getLogger(__name__)


def build_store(settings: Settings) -> RecordStore:
    layout = RecordLayout.from_spec(settings.record_columns)
    parser = RecordParser(layout, delimiter=settings.delimiter)
    return RecordStore(parser, strict=settings.strict_duplicates)


class CatalogLoader:
    """Runs load passes of the configured source into a store.

    When a session factory is given, each pass is written to the load ledger.
    """

    def __init__(
        self,
        settings: Settings,
        store: RecordStore,
        session_factory: sessionmaker[Session] | None = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.session_factory = session_factory

    def run(self) -> LoadReport:
        source = self.settings.source_path
        logger.info("load started", extra={"source": source, "strict": self.store.strict})

        if self.session_factory is None:
            try:
                return self.store.load_file(source)
            except SourceUnavailableError:
                logger.exception("load failed", extra={"source": source})
                raise

        with self.session_factory() as db:
            run = create_load_run(db, source=source)
            try:
                report = self.store.load_file(source)
            except SourceUnavailableError as exc:
                mark_load_failed(db, run, error=str(exc))
                logger.exception("load failed", extra={"source": source, "load_run_id": run.id})
                raise

            store_load_failures(db, run_id=run.id, failures=report.failures)
            mark_load_succeeded(db, run, report)
            logger.info("load recorded in ledger", extra={"source": source, "load_run_id": run.id})
            return report
