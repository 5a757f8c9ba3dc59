from sqlalchemy import select
from sqlalchemy.orm import Session

from recordindex.db_models import LoadFailureRow, LoadRun, utc_now
from recordindex.schemas import LoadFailure, LoadReport


def create_load_run(db: Session, *, source: str) -> LoadRun:
    run = LoadRun(source=source, status="running", started_at=utc_now())
    db.add(run)
    db.commit()
    db.refresh(run)
    return run


def mark_load_succeeded(db: Session, run: LoadRun, report: LoadReport) -> None:
    run.status = "succeeded"
    run.lines_processed = report.lines_processed
    run.records_stored = report.records_stored
    run.parse_failures = report.parse_failures
    run.completed_at = utc_now()
    run.error = None
    db.commit()


def mark_load_failed(db: Session, run: LoadRun, *, error: str) -> None:
    run.status = "failed"
    run.error = error
    run.completed_at = utc_now()
    db.commit()


def store_load_failures(db: Session, *, run_id: int, failures: list[LoadFailure]) -> None:
    for failure in failures:
        db.add(
            LoadFailureRow(
                run_id=run_id,
                line_number=failure.line_number,
                raw_line=failure.line,
                reason=failure.reason,
            )
        )
    db.commit()


def latest_load_run(db: Session, source: str | None = None) -> LoadRun | None:
    stmt = select(LoadRun).order_by(LoadRun.id.desc()).limit(1)
    if source is not None:
        stmt = stmt.where(LoadRun.source == source)
    return db.execute(stmt).scalar_one_or_none()
