"""Pydantic configuration models for skillgap."""

import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from shared_types import SortStrategy

DEFAULT_TTL_MILLIS = 12 * 3600 * 1000


class CacheConfig(BaseModel):
    """Evidence cache configuration."""

    max_size: int = 100
    default_ttl_millis: int = DEFAULT_TTL_MILLIS
    sweep_interval_seconds: int = 3600

    @field_validator("max_size", "default_ttl_millis", "sweep_interval_seconds")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError(f"must be > 0, got {v}")
        return v


class RateLimitConfig(BaseModel):
    """Token bucket for one provider."""

    requests_per_second: float = 5.0
    burst: int = 10

    @field_validator("requests_per_second")
    @classmethod
    def validate_rate(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"must be > 0, got {v}")
        return v

    @field_validator("burst")
    @classmethod
    def validate_burst(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be >= 1, got {v}")
        return v


class ProviderConfig(BaseModel):
    """Demand source configuration (shared by GitHub and Stack Overflow)."""

    github_token: Optional[str] = None
    stackoverflow_key: Optional[str] = None
    timeout_seconds: float = 10.0
    retry_attempts: int = 2
    github_rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    stackoverflow_rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)

    @field_validator("timeout_seconds")
    @classmethod
    def validate_positive_float(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"must be > 0, got {v}")
        return v

    @field_validator("retry_attempts")
    @classmethod
    def validate_at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be >= 1, got {v}")
        return v


VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_mode: bool = False

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v_upper = v.upper()
        if v_upper not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {VALID_LOG_LEVELS}")
        return v_upper


class AnalyzerConfig(BaseModel):
    """Gap analyzer defaults."""

    default_sort: SortStrategy = SortStrategy.IMPACT
    suggestion_count: int = 3

    @field_validator("suggestion_count")
    @classmethod
    def validate_count(cls, v: int) -> int:
        if v < 0:
            raise ValueError(f"suggestion_count must be >= 0, got {v}")
        return v


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000


class ValidatorConfig(BaseModel):
    """Main configuration model."""

    cache: CacheConfig = Field(default_factory=CacheConfig)
    providers: ProviderConfig = Field(default_factory=ProviderConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    analyzer: AnalyzerConfig = Field(default_factory=AnalyzerConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @model_validator(mode="after")
    def expand_env_vars(self):
        """Expand ${VAR} patterns in credentials."""
        for field_name in ("github_token", "stackoverflow_key"):
            value = getattr(self.providers, field_name)
            if value and value.startswith("${") and value.endswith("}"):
                setattr(self.providers, field_name, os.getenv(value[2:-1]) or None)
        return self

    @classmethod
    def from_dict(cls, data: dict) -> "ValidatorConfig":
        """Create config from dict, accepting cache TTL in hours as well."""
        cache = data.get("cache")
        if isinstance(cache, dict) and "ttl_hours" in cache:
            cache = dict(cache)
            hours = cache.pop("ttl_hours")
            cache.setdefault("default_ttl_millis", int(float(hours) * 3600 * 1000))
            data = {**data, "cache": cache}
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        return self.model_dump(mode="python")
