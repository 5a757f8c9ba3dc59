from collections.abc import Iterable, Iterator
from contextlib import contextmanager
import logging
from pathlib import Path
import threading

from recordindex.errors import MalformedRecordError, SourceUnavailableError
from recordindex.parser import RecordParser
from recordindex.schemas import LoadFailure, LoadReport, Record


logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Many readers or one writer."""

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self._readers = 0
        self._writing = False

    @contextmanager
    def read(self) -> Iterator[None]:
        with self._cond:
            while self._writing:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write(self) -> Iterator[None]:
        with self._cond:
            while self._writing or self._readers:
                self._cond.wait()
            self._writing = True
        try:
            yield
        finally:
            with self._cond:
                self._writing = False
                self._cond.notify_all()


class RecordStore:
    """In-memory index of records keyed by identifier.

    Same-identifier inserts are last-write-wins. With ``strict=True`` a
    repeated identifier inside a single load pass is reported as a failure
    and the first record of that pass is kept.
    """

    def __init__(self, parser: RecordParser, *, strict: bool = False) -> None:
        self.parser = parser
        self.strict = strict
        self._records: dict[str, Record] = {}
        self._lock = ReadWriteLock()
        self._load_lock = threading.Lock()

    def load_file(self, path: str | Path) -> LoadReport:
        source_path = Path(path)
        try:
            infile = source_path.open("r", encoding="utf-8")
        except OSError as exc:
            raise SourceUnavailableError(str(source_path), exc.strerror or str(exc)) from exc

        with infile:
            return self.load_from(infile, source=str(source_path))

    def load_from(self, lines: Iterable[str], source: str = "<lines>") -> LoadReport:
        report = LoadReport(source=source)
        seen: set[str] = set()

        with self._load_lock:
            try:
                iterator = iter(lines)
                # Header is discarded without inspection.
                if next(iterator, None) is None:
                    return report

                for line_number, line in enumerate(iterator, start=2):
                    if not line.strip():
                        continue
                    report.lines_processed += 1

                    try:
                        record = self.parser.parse(line, line_number)
                    except MalformedRecordError as exc:
                        self._add_failure(report, line_number, exc.line, exc.reason)
                        continue

                    if self.strict and record.identifier in seen:
                        self._add_failure(
                            report,
                            line_number,
                            line.rstrip("\r\n"),
                            f"duplicate identifier {record.identifier!r}",
                        )
                        continue
                    seen.add(record.identifier)

                    if self._insert(record):
                        report.records_replaced += 1
                    report.records_stored += 1
            except (OSError, UnicodeDecodeError) as exc:
                logger.error(
                    "record source failed mid-load",
                    extra={"source": source, "records_stored": report.records_stored},
                )
                raise SourceUnavailableError(source, str(exc)) from exc

        logger.info(
            "records loaded",
            extra={
                "source": source,
                "lines_processed": report.lines_processed,
                "records_stored": report.records_stored,
                "parse_failures": report.parse_failures,
            },
        )
        return report

    def get(self, identifier: str) -> Record | None:
        with self._lock.read():
            return self._records.get(identifier)

    def list_all(self) -> list[Record]:
        with self._lock.read():
            return list(self._records.values())

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._records)

    def __contains__(self, identifier: object) -> bool:
        with self._lock.read():
            return identifier in self._records

    def _insert(self, record: Record) -> bool:
        with self._lock.write():
            replaced = record.identifier in self._records
            self._records[record.identifier] = record
        return replaced

    def _add_failure(self, report: LoadReport, line_number: int, line: str, reason: str) -> None:
        report.failures.append(LoadFailure(line_number=line_number, line=line, reason=reason))
        logger.warning(
            "skipping malformed line",
            extra={"source": report.source, "line_number": line_number, "reason": reason},
        )
