from pathlib import Path
from typing import Annotated, List

import orjson
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from filmpass.platform.constant.path import SESSION_STATE_DIR


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'FilmPass Booking'
    VERSION: str = '0.1.0'
    DEBUG: bool = False

    # Backend REST API
    API_BASE_URL: str = 'http://localhost:8080/api'
    API_TIMEOUT_SECONDS: float = 10.0

    # Where the payment provider sends the user back to
    APP_BASE_URL: str = 'http://localhost:5173'
    PAYMENT_SUCCESS_PATH: str = '/payment/success'
    PAYMENT_CANCEL_PATH: str = '/payment/cancel'

    # Money display
    CURRENCY_SYMBOL: str = '€'
    # Integer amounts above this are assumed to be minor units (cents)
    MINOR_UNIT_THRESHOLD: int = 100

    # Session persistence (token + user profile)
    SESSION_STATE_FILE: str = str(SESSION_STATE_DIR / 'session.json')

    # CORS: comma-separated or a JSON list
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = []

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and v.strip().startswith('['):
            return orjson.loads(v)
        elif isinstance(v, str):
            return [i.strip() for i in v.split(',') if i.strip()]
        elif isinstance(v, list):
            return v
        return []

    @field_validator('API_BASE_URL', 'APP_BASE_URL')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip('/')

    @property
    def PAYMENT_SUCCESS_URL(self) -> str:
        return f'{self.APP_BASE_URL}{self.PAYMENT_SUCCESS_PATH}'

    @property
    def PAYMENT_CANCEL_URL(self) -> str:
        return f'{self.APP_BASE_URL}{self.PAYMENT_CANCEL_PATH}'


settings = Settings()  # type: ignore
