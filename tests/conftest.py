from pathlib import Path

import pytest
from sqlalchemy.orm import Session, sessionmaker

from recordindex.config import Settings
from recordindex.database import build_session_factory
from recordindex.parser import RecordParser
from recordindex.record_store import RecordStore
from recordindex.schemas import RecordLayout


SCORE_LAYOUT = "id:text,name:text,score:int"


@pytest.fixture()
def layout() -> RecordLayout:
    return RecordLayout.from_spec(SCORE_LAYOUT)


@pytest.fixture()
def parser(layout: RecordLayout) -> RecordParser:
    return RecordParser(layout)


@pytest.fixture()
def store(parser: RecordParser) -> RecordStore:
    return RecordStore(parser)


@pytest.fixture()
def source_file(tmp_path: Path) -> Path:
    path = tmp_path / "catalog.csv"
    path.write_text(
        "id,name,score\n"
        "A1,Alpha,10\n"
        "A2,Beta,bad\n"
        "A3,Gamma,30\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def test_settings(tmp_path: Path, source_file: Path) -> Settings:
    return Settings(
        app_name="recordindex",
        source_path=str(source_file),
        record_columns=SCORE_LAYOUT,
        delimiter=",",
        strict_duplicates=False,
        log_level="INFO",
        ledger_database_url=f"sqlite:///{tmp_path / 'ledger.db'}",
        reload_interval_minutes=0,
    )


@pytest.fixture()
def session_factory(test_settings: Settings) -> sessionmaker[Session]:
    return build_session_factory(test_settings.ledger_database_url)
