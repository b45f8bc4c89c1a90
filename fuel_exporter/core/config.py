from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

from dotenv import find_dotenv, load_dotenv

LogLevel = Literal["debug", "info", "warning", "error"]

DEFAULT_UPSTREAM_URL = (
    "https://www.allstarcard.co.uk/Umbraco/Api/Fuelcards/GetNearestStations"
)


def _getenv(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip()


def _require(name: str) -> str:
    value = _getenv(name)
    if not value:
        raise ValueError(f"{name} must be set")
    return value


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from None


def _parse_postcodes(raw: str) -> tuple[str, ...]:
    postcodes = tuple(p.strip() for p in raw.split(","))
    if any(not p for p in postcodes):
        raise ValueError(f"POSTCODES must not contain empty entries (got {raw!r})")
    if len(set(postcodes)) != len(postcodes):
        raise ValueError(f"POSTCODES must not contain duplicates (got {raw!r})")
    return postcodes


@dataclass(frozen=True)
class Settings:
    port: int
    postcodes: tuple[str, ...]
    radius: int
    log_level: LogLevel = "info"
    log_json: bool = False
    upstream_url: str = DEFAULT_UPSTREAM_URL
    upstream_timeout: float | None = None


def load_env_file() -> None:
    """Load a .env file from the working directory (or a parent), if any.

    Variables already set in the environment win over the file.
    """
    load_dotenv(find_dotenv(usecwd=True), override=False)


def load_settings() -> Settings:
    port = _parse_int("PORT", _require("PORT"))
    postcodes = _parse_postcodes(_require("POSTCODES"))
    radius = _parse_int("RADIUS", _require("RADIUS"))

    if radius < 0:
        raise ValueError(f"RADIUS must not be negative (got {radius})")

    if not 0 < port < 65536:
        raise ValueError(f"PORT must be between 1 and 65535 (got {port})")

    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    log_json_raw = _getenv("LOG_JSON", "false").lower()
    if log_json_raw not in ("true", "false", "1", "0", "yes", "no"):
        raise ValueError(f"LOG_JSON must be a boolean (got {log_json_raw!r})")

    timeout_raw = _getenv("UPSTREAM_TIMEOUT")
    upstream_timeout: float | None = None
    if timeout_raw:
        try:
            upstream_timeout = float(timeout_raw)
        except ValueError:
            raise ValueError(
                f"UPSTREAM_TIMEOUT must be a number of seconds (got {timeout_raw!r})"
            ) from None

    return Settings(  # type: ignore[arg-type]
        port=port,
        postcodes=postcodes,
        radius=radius,
        log_level=log_level_raw,
        log_json=log_json_raw in ("true", "1", "yes"),
        upstream_url=_getenv("UPSTREAM_URL") or DEFAULT_UPSTREAM_URL,
        upstream_timeout=upstream_timeout,
    )
