"""Pydantic config models + YAML loading."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class StoreConfig(BaseModel):
    path: str = "traits.json"
    indent: Optional[int] = None  # None writes the compact canonical form


class DeviceConfig(BaseModel):
    id_path: str = "device_id"


class LoggingConfig(BaseModel):
    level: LogLevel = LogLevel.INFO


class TraitsConfig(BaseModel):
    store: StoreConfig = StoreConfig()
    device: DeviceConfig = DeviceConfig()
    logging: LoggingConfig = LoggingConfig()


def load_config(path: str | Path) -> TraitsConfig:
    """Load config from YAML, merging with defaults."""
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return TraitsConfig(**raw)
