from pydantic import BaseModel, ConfigDict, Field, field_validator

from sessiontree.constants import (
    DEFAULT_HEADER_READ_LIMIT,
    DEFAULT_LOG_FILE,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_MIN_VISIBLE_LINES,
    DEFAULT_SESSIONS_DIR,
    DEFAULT_VISIBLE_FRACTION,
)


class SessionTreeConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    sessions_dir: str = DEFAULT_SESSIONS_DIR
    header_read_limit: int = Field(default=DEFAULT_HEADER_READ_LIMIT, ge=1)
    max_concurrency: int = Field(default=DEFAULT_MAX_CONCURRENCY, ge=1)
    visible_fraction: float = Field(default=DEFAULT_VISIBLE_FRACTION, gt=0, le=1)
    min_visible_lines: int = Field(default=DEFAULT_MIN_VISIBLE_LINES, ge=1)
    log_level: str = "INFO"
    log_file: str = DEFAULT_LOG_FILE

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        normalized = v.upper()
        if normalized not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return normalized
