"""Unit tests for environment-driven settings."""

import pytest

from entity_sql.config import Settings, get_settings
from entity_sql.sql.expressions import SqlglotExpressionParser
from entity_sql.sql.where import default_parser


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "LOG_LEVEL",
        "ENTITY_SQL_PARSER_DIALECT",
        "ENTITY_SQL_LOG_TO_FILE",
        "ENTITY_SQL_LOG_FILE_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield monkeypatch
    get_settings.cache_clear()


@pytest.mark.unit
class TestSettings:
    """Defaults and environment overrides."""

    def test_defaults(self, clean_env):
        settings = Settings(_env_file=None)

        assert settings.LOG_LEVEL == "INFO"
        assert settings.parser_dialect == "mysql"
        assert settings.log_to_file is False
        assert settings.log_file_dir == "logs"

    def test_prefixed_override(self, clean_env):
        clean_env.setenv("ENTITY_SQL_PARSER_DIALECT", "postgres")
        clean_env.setenv("ENTITY_SQL_LOG_TO_FILE", "true")

        settings = Settings(_env_file=None)

        assert settings.parser_dialect == "postgres"
        assert settings.log_to_file is True

    def test_log_level_unprefixed_and_upper_cased(self, clean_env):
        clean_env.setenv("LOG_LEVEL", "debug")

        assert Settings(_env_file=None).LOG_LEVEL == "DEBUG"

    def test_get_settings_is_cached(self, clean_env):
        assert get_settings() is get_settings()

    def test_default_parser_follows_dialect(self, clean_env):
        clean_env.setenv("ENTITY_SQL_PARSER_DIALECT", "postgres")

        parser = default_parser()

        assert isinstance(parser, SqlglotExpressionParser)
        assert parser.dialect == "postgres"
