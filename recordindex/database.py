from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from recordindex.db_models import Base


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # load_failures rows rely on ON DELETE CASCADE.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_session_factory(ledger_url: str) -> sessionmaker[Session]:
    """Create the ledger engine and tables, and return a session factory."""
    is_sqlite = ledger_url.startswith("sqlite")
    # The reload scheduler writes to the ledger from its own thread.
    engine = create_engine(ledger_url, connect_args={"check_same_thread": False} if is_sqlite else {})
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
