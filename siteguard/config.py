"""Central configuration & logging utilities."""
from __future__ import annotations

import logging
import sys
from functools import lru_cache
from pathlib import Path
from typing import Optional, TextIO

from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "siteguard"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class Settings(BaseSettings):
    APP_NAME: str = "SiteGuard - Website Security Audit"
    BASE_URL: str = "http://127.0.0.1:8000"
    ENV: str = "development"

    SCAN_SERVICE_URL: str = "http://localhost:3001"
    PDF_SERVICE_URL: Optional[str] = None
    REQUEST_TIMEOUT: float = 60.0

    STRIPE_SECRET_KEY: Optional[str] = None
    STRIPE_PRICE_ID: Optional[str] = None

    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[Path] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def setup_logging(level: Optional[str] = None, log_dir: Optional[Path] = None,
                  stream: TextIO = sys.stdout) -> logging.Logger:
    settings = get_settings()
    level = level or settings.LOG_LEVEL
    log_dir = log_dir or settings.LOG_DIR
    lvl = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(APP_NAME)
    logger.setLevel(lvl)
    logger.handlers.clear()
    logger.propagate = False

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    ch = logging.StreamHandler(stream)
    ch.setLevel(lvl)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    if log_dir:
        log_dir = Path(log_dir).expanduser().resolve()
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / f"{APP_NAME}.log", encoding="utf-8")
        fh.setLevel(lvl)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    return logger
