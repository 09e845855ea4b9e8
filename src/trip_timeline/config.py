"""应用配置加载。"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from datetime import datetime, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

from trip_timeline.domain.timeline_types import LayoutScale

DB_PATH_ENV = "TRIP_TIMELINE_DB_PATH"
TIMEZONE_ENV = "TRIP_TIMELINE_TZ"
LOG_LEVEL_ENV = "TRIP_TIMELINE_LOG_LEVEL"
SCALE_ENV_FIELDS: dict[str, str] = {
    "TRIP_TIMELINE_PIXELS_PER_HOUR": "pixels_per_hour",
    "TRIP_TIMELINE_MIN_HEIGHT_PX": "min_height_px",
    "TRIP_TIMELINE_ALL_DAY_HEIGHT_PX": "all_day_height_px",
}


class ConfigError(ValueError):
    """配置相关错误。"""


@dataclass(frozen=True, slots=True)
class AppConfig:
    """应用运行配置。"""

    db_path: Path
    timezone: tzinfo
    timezone_name: str
    scale: LayoutScale


def load_app_config(
    db_path: str | None = None,
    timezone_name: str | None = None,
    require_db: bool = True,
) -> AppConfig:
    """加载应用配置。"""

    load_dotenv(override=False)
    resolved_db_path = resolve_db_path(db_path, must_exist=require_db)
    resolved_timezone, resolved_timezone_name = resolve_timezone(timezone_name)
    return AppConfig(
        db_path=resolved_db_path,
        timezone=resolved_timezone,
        timezone_name=resolved_timezone_name,
        scale=resolve_layout_scale(),
    )


def resolve_db_path(db_path: str | None = None, must_exist: bool = True) -> Path:
    """解析数据库路径，优先级：参数 > 环境变量。"""

    raw_path = db_path or os.getenv(DB_PATH_ENV)
    if not raw_path:
        raise ConfigError(
            f"Unable to resolve database path. Set {DB_PATH_ENV} or pass --db-path."
        )

    candidate = _normalize_path(raw_path)
    if must_exist and not candidate.exists():
        raise ConfigError(f"Database path does not exist: {candidate}")
    return candidate


def resolve_timezone(timezone_name: str | None = None) -> tuple[tzinfo, str]:
    """解析显示时区，默认使用系统时区。"""

    name = timezone_name or os.getenv(TIMEZONE_ENV)
    if name:
        try:
            zone = ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ConfigError(f"Unknown timezone: {name}") from exc
        return zone, name

    local_timezone = datetime.now().astimezone().tzinfo
    if local_timezone is None:
        raise ConfigError("Unable to determine system timezone.")

    zone_key = getattr(local_timezone, "key", None)
    if isinstance(zone_key, str) and zone_key:
        return local_timezone, zone_key

    zone_name = datetime.now().astimezone().tzname() or "local"
    return local_timezone, zone_name


def resolve_layout_scale() -> LayoutScale:
    """从环境变量读取像素比例覆盖值。"""

    overrides: dict[str, float] = {}
    for env_name, field_name in SCALE_ENV_FIELDS.items():
        raw_value = os.getenv(env_name)
        if raw_value is None or not raw_value.strip():
            continue
        overrides[field_name] = _parse_positive_number(env_name, raw_value)
    return LayoutScale(**overrides)


def resolve_log_level(verbose: bool = False) -> str:
    """解析日志级别，--verbose 优先。"""

    load_dotenv(override=False)
    if verbose:
        return "DEBUG"
    raw_value = os.getenv(LOG_LEVEL_ENV, "WARNING").strip().upper()
    if raw_value not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        raise ConfigError(f"Invalid log level: {raw_value}")
    return raw_value


def _parse_positive_number(env_name: str, raw_value: str) -> float:
    try:
        value = float(raw_value)
    except ValueError as exc:
        raise ConfigError(f"{env_name} must be a number, got {raw_value!r}.") from exc
    if not math.isfinite(value) or value <= 0:
        raise ConfigError(f"{env_name} must be positive, got {raw_value!r}.")
    return value


def _normalize_path(raw_path: str) -> Path:
    """标准化路径。"""

    return Path(raw_path).expanduser().resolve()
