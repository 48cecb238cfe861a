from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://localhost:3000,http://localhost:5174"


@dataclass(frozen=True)
class Settings:
    """
    Application settings loaded from environment variables.

    Env vars:
    - TODOAPI_DATA_PATH: explicit path of the JSON data file (wins over the two below)
    - TODOAPI_DATA_DIRECTORY: directory holding the data file. Default './data'
    - TODOAPI_DATA_FILE_NAME: data file name. Default 'todos.json'
    - CORS_ALLOW_ORIGINS: comma-separated list of allowed origins, or '*'
    - LOG_LEVEL: DEBUG, INFO (default), WARNING, ERROR
    - LOG_FORMAT: 'console' (default) or 'json'
    - LOG_FILE: optional log file path, rotated daily (e.g. logs/todo-api.log)
    - HOST / PORT: bind address for the `todo-api` entry point (127.0.0.1:8000)
    """

    data_path: Optional[str] = None
    data_directory: str = "./data"
    data_file_name: str = "todos.json"
    cors_allow_origins: List[str] = field(default_factory=lambda: _parse_origins(DEFAULT_CORS_ORIGINS))
    log_level: str = "INFO"
    log_format: str = "console"
    log_file: Optional[str] = None
    host: str = "127.0.0.1"
    port: int = 8000


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_int(value: str, default: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        return default


def _parse_origins(origins_value: str) -> List[str]:
    """
    Parse CORS origins from env. Supports:
    - '*' to allow all origins
    - Comma-separated list of origins
    """
    value = origins_value.strip()
    if value == "*":
        return ["*"]
    return [o.strip() for o in value.split(",") if o.strip()]


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return application settings loaded from environment variables."""
    data_path = os.getenv("TODOAPI_DATA_PATH")
    log_file = os.getenv("LOG_FILE")
    log_format = _get_env("LOG_FORMAT", "console").strip().lower()
    if log_format not in {"console", "json"}:
        log_format = "console"

    return Settings(
        data_path=data_path.strip() if data_path and data_path.strip() else None,
        data_directory=_get_env("TODOAPI_DATA_DIRECTORY", "./data").strip(),
        data_file_name=_get_env("TODOAPI_DATA_FILE_NAME", "todos.json").strip(),
        cors_allow_origins=_parse_origins(_get_env("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS)),
        log_level=_get_env("LOG_LEVEL", "INFO").strip().upper(),
        log_format=log_format,
        log_file=log_file.strip() if log_file and log_file.strip() else None,
        host=_get_env("HOST", "127.0.0.1").strip(),
        port=_parse_int(_get_env("PORT", "8000"), 8000),
    )
