from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class FlaskSettings:
    secret_key: str = "sglotto-dev-secret"
    debug: bool = True


@dataclass(frozen=True)
class LogSettings:
    log_dir: str = "debug"
    retention_days: int = 14
    max_bytes: int = 5 * 1024 * 1024


@dataclass(frozen=True)
class AppSettings:
    flask: FlaskSettings
    logging: LogSettings
    database_url: str
    admin_api_key: Optional[str]
    site_url: str


def _int_from_env(value: Optional[str], default: int) -> int:
    if value is None or value == "":
        return default
    return int(value)


@lru_cache(maxsize=1)
def load_settings(dotenv_path: Optional[str] = None) -> AppSettings:
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        load_dotenv()

    flask_settings = FlaskSettings(
        secret_key=os.getenv("FLASK_SECRET_KEY", "sglotto-dev-secret"),
        debug=os.getenv("FLASK_DEBUG", "1") == "1",
    )

    log_settings = LogSettings(
        log_dir=os.getenv("LOG_DIR", "debug"),
        retention_days=_int_from_env(os.getenv("LOG_RETENTION_DAYS"), 14),
        max_bytes=_int_from_env(os.getenv("LOG_MAX_BYTES"), 5 * 1024 * 1024),
    )

    return AppSettings(
        flask=flask_settings,
        logging=log_settings,
        database_url=os.getenv("DATABASE_URL", "sqlite:///sglotto.db"),
        admin_api_key=os.getenv("ADMIN_API_KEY") or None,
        site_url=os.getenv("SITE_URL", "https://sglottoresult.com"),
    )
