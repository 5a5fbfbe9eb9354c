import json
from pathlib import Path
from typing import Annotated, List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Tikiti Ticketing'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # CORS: comma separated, or a JSON list
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str):
            if v.strip().startswith('['):
                return json.loads(v)
            return [i.strip() for i in v.split(',') if i.strip()]
        if isinstance(v, list):
            return v
        return []

    # Database
    # DATABASE_URL wins when set (e.g. sqlite+aiosqlite:///./tikiti.db for local runs)
    DATABASE_URL: str = ''
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'tikiti'

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        password = self.POSTGRES_PASSWORD.get_secret_value()
        return f'postgresql+asyncpg://{self.POSTGRES_USER}:{password}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'

    # Connection pool (ignored for SQLite)
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30  # seconds to wait for a free connection
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    # Paystack
    PAYSTACK_SECRET_KEY: SecretStr = SecretStr('')
    PAYSTACK_BASE_URL: str = 'https://api.paystack.co'
    PAYMENT_VERIFY_TIMEOUT_SECONDS: float = 10.0
    PAYMENT_CURRENCY: str = 'NGN'

    # Purchase
    PURCHASE_MAX_ATTEMPTS: int = 3
    MAX_TICKETS_PER_PURCHASE: int = 10
    PURCHASE_TIMEOUT_SECONDS: float = 20.0

    # Redemption
    REDEMPTION_TIMEOUT_SECONDS: float = 5.0
    SCANNER_API_KEY: SecretStr = SecretStr('')  # empty disables the X-API-Key check

    # Tracing
    OTEL_EXPORTER_OTLP_ENDPOINT: str = ''  # empty: spans are not exported
    OTEL_CONSOLE_EXPORT: bool = False
    TRACE_SAMPLE_RATIO: float = 1.0


settings = Settings()  # type: ignore
