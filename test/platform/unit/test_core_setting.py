from pathlib import Path

import pytest

from tikiti.platform.config.core_setting import Settings


ENV_EXAMPLE = Path(__file__).resolve().parents[3] / '.env.example'


@pytest.mark.unit
class TestSettings:
    def test_loads_shipped_env_example(self, monkeypatch: pytest.MonkeyPatch) -> None:
        # Arrange
        monkeypatch.delenv('BACKEND_CORS_ORIGINS', raising=False)

        # Act
        loaded = Settings(_env_file=ENV_EXAMPLE)  # type: ignore[call-arg]

        # Assert
        assert loaded.BACKEND_CORS_ORIGINS == ['http://localhost:3000']
        assert loaded.PAYMENT_CURRENCY == 'NGN'
        assert loaded.PURCHASE_MAX_ATTEMPTS == 3

    @pytest.mark.parametrize(
        'raw',
        ['http://a.test, http://b.test', '["http://a.test", "http://b.test"]'],
    )
    def test_cors_origins_from_env(self, monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', raw)

        loaded = Settings(_env_file=None)  # type: ignore[call-arg]

        assert loaded.BACKEND_CORS_ORIGINS == ['http://a.test', 'http://b.test']

    def test_database_url_built_from_postgres_parts(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv('DATABASE_URL', raising=False)

        loaded = Settings(  # type: ignore[call-arg]
            _env_file=None, POSTGRES_SERVER='db', POSTGRES_DB='tikiti'
        )

        assert loaded.DATABASE_URL_ASYNC == 'postgresql+asyncpg://postgres:postgres@db:5432/tikiti'
