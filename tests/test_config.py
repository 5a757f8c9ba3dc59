import pytest

from recordindex.config import DEFAULT_RECORD_COLUMNS, get_settings
from recordindex.errors import ConfigurationError


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SOURCE_PATH", "RECORD_COLUMNS", "STRICT_DUPLICATES", "LEDGER_DATABASE_URL", "RELOAD_INTERVAL_MINUTES"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.source_path == "./data.csv"
    assert settings.record_columns == DEFAULT_RECORD_COLUMNS
    assert settings.strict_duplicates is False
    assert settings.ledger_database_url is None
    assert settings.reload_interval_minutes == 0


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SOURCE_PATH", "/srv/songs.csv")
    monkeypatch.setenv("STRICT_DUPLICATES", "Yes")
    monkeypatch.setenv("RELOAD_INTERVAL_MINUTES", "2.5")

    settings = get_settings()

    assert settings.source_path == "/srv/songs.csv"
    assert settings.strict_duplicates is True
    assert settings.reload_interval_minutes == 2.5


def test_bad_boolean_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STRICT_DUPLICATES", "sometimes")

    with pytest.raises(ConfigurationError):
        get_settings()
