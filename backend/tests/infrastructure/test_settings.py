"""Settings and bootstrap — verifies env-driven config and process setup."""

import pytest
from pydantic import ValidationError

import libris.infrastructure.database as db_module
import libris.main as main_module
import libris.schemas.validation as validation_module
from libris.config import Settings
from libris.core.validation_messages import Locale


def test_postgres_url_rewritten_for_asyncpg():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.loan_period_days == 14
    assert settings.database_pool_size == 20
    assert settings.validation_locale == "en"


def test_loan_period_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(loan_period_days=0)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("LOAN_PERIOD_DAYS", "21")
    monkeypatch.setenv("VALIDATION_LOCALE", "tr")
    settings = Settings(_env_file=None)
    assert settings.loan_period_days == 21
    assert settings.validation_locale == "tr"


async def test_bootstrap_initializes_logging_and_db(monkeypatch):
    calls = []
    monkeypatch.setattr(main_module, "setup_logging", lambda *args: calls.append(args))
    monkeypatch.setattr(db_module, "db_manager", None)
    monkeypatch.setattr(validation_module, "_default_locale", Locale.EN)

    manager = main_module.bootstrap(Settings(
        database_url="sqlite+aiosqlite:///:memory:", log_level="DEBUG", log_format="text",
        validation_locale="tr",
    ))

    assert calls == [("DEBUG", "text")]
    assert validation_module._default_locale is Locale.TR
    assert db_module.db_manager is manager
    assert await manager.health_check()
    await main_module.shutdown(manager)
