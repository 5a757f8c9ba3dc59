from dataclasses import dataclass
import os

from dotenv import load_dotenv

from recordindex.errors import ConfigurationError


load_dotenv()

DEFAULT_RECORD_COLUMNS = "id:text,name:text,artists:text,popularity:int,duration_ms:int"


@dataclass(frozen=True)
class Settings:
    app_name: str
    source_path: str
    record_columns: str
    delimiter: str
    strict_duplicates: bool
    log_level: str
    ledger_database_url: str | None
    reload_interval_minutes: float


def _env_flag(name: str, default: str) -> bool:
    raw = os.getenv(name, default).strip().lower()
    if raw in ("1", "true", "yes", "on"):
        return True
    if raw in ("0", "false", "no", "off", ""):
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")


def get_settings() -> Settings:
    try:
        reload_interval_minutes = float(os.getenv("RELOAD_INTERVAL_MINUTES", "0"))
    except ValueError as exc:
        raise ConfigurationError(f"RELOAD_INTERVAL_MINUTES must be a number: {exc}") from exc

    return Settings(
        app_name=os.getenv("APP_NAME", "recordindex"),
        source_path=os.getenv("SOURCE_PATH", "./data.csv"),
        record_columns=os.getenv("RECORD_COLUMNS", DEFAULT_RECORD_COLUMNS),
        delimiter=os.getenv("DELIMITER", ","),
        strict_duplicates=_env_flag("STRICT_DUPLICATES", "false"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        ledger_database_url=os.getenv("LEDGER_DATABASE_URL") or None,
        reload_interval_minutes=reload_interval_minutes,
    )
