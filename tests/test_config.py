"""
Tests for Settings (record store selection, query cache size, SQLAlchemy URL)
"""
import pytest
from pydantic import ValidationError

from app.config import Settings


class TestSettings:
    def test_record_store_normalized(self):
        assert Settings(RECORD_STORE=" REST ").RECORD_STORE == "rest"

    def test_unknown_record_store(self):
        with pytest.raises(ValidationError, match="RECORD_STORE"):
            Settings(RECORD_STORE="mongo")

    @pytest.mark.parametrize("size", [0, -5])
    def test_cache_size_must_be_positive(self, size):
        with pytest.raises(ValidationError, match="QUERY_CACHE_MAX_ENTRIES"):
            Settings(QUERY_CACHE_MAX_ENTRIES=size)

    def test_sqlalchemy_url_uses_psycopg(self):
        settings = Settings(DATABASE_URL="postgresql://u:p@db:5432/opsdeck")
        assert settings.get_sqlalchemy_url() == "postgresql+psycopg://u:p@db:5432/opsdeck"

    def test_sqlite_url_untouched(self):
        assert Settings(DATABASE_URL="sqlite://").get_sqlalchemy_url() == "sqlite://"
