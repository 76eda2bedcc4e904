from functools import lru_cache
import json
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from classplan.schemas.common import parse_time_window, validate_day_name


BACKEND_ENV_FILE = Path(__file__).resolve().parents[2] / ".env"

DEFAULT_TEACHING_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

DEFAULT_TIME_WINDOWS = [
    "09:00 - 10:00",
    "10:00 - 11:00",
    "11:00 - 12:00",
    "12:00 - 13:00",
    "13:00 - 14:00",
    "14:00 - 15:00",
    "15:00 - 16:00",
    "16:00 - 17:00",
]


def _split_list_value(value: str | list[str]) -> list[str]:
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.startswith("["):
            try:
                parsed = json.loads(stripped)
                if isinstance(parsed, list):
                    return [str(item).strip() for item in parsed if str(item).strip()]
            except json.JSONDecodeError:
                pass
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class Settings(BaseSettings):
    # Resolve to backend/.env so `uvicorn --app-dir backend` works from any cwd.
    model_config = SettingsConfigDict(env_file=str(BACKEND_ENV_FILE), env_file_encoding="utf-8")

    project_name: str = "ClassPlan API"
    api_prefix: str = "/api"
    log_level: str = "INFO"

    database_url: str = "sqlite:///./classplan.db"

    teaching_days: list[str] = list(DEFAULT_TEACHING_DAYS)
    time_windows: list[str] = list(DEFAULT_TIME_WINDOWS)
    # Only the first N windows of each day are offered to the allocator.
    periods_per_day: int = 6
    unschedulable_penalty: float = 100.0
    random_seed: int | None = None

    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    @field_validator("cors_origins", "teaching_days", "time_windows", mode="before")
    @classmethod
    def split_list_fields(cls, value: str | list[str]) -> list[str]:
        return _split_list_value(value)

    @field_validator("teaching_days")
    @classmethod
    def validate_teaching_days(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("teaching_days cannot be empty")
        days: list[str] = []
        for item in value:
            day = validate_day_name(item)
            if day not in days:
                days.append(day)
        return days

    @field_validator("time_windows")
    @classmethod
    def validate_time_windows(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("time_windows cannot be empty")
        for label in value:
            parse_time_window(label)
        return value

    @field_validator("periods_per_day")
    @classmethod
    def validate_periods_per_day(cls, value: int) -> int:
        if value < 1:
            raise ValueError("periods_per_day must be at least 1")
        return value


@lru_cache
def get_settings() -> Settings:
    return Settings()
