"""Settings loaded from the packaged YAML config."""

from pathlib import Path
from typing import Optional, Union

from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel, Field, field_validator


CONFIG_DIR = Path(__file__).parent / "conf"
CONFIG_FILE = CONFIG_DIR / "config.yaml"


class AppSettings(BaseModel):
    name: str = "Media Resolver"
    version: str = "1.0.0"
    environment: str = "production"
    allowed_origins: list[str] = Field(default_factory=lambda: ["https://yourdomain.com"])
    
    @field_validator("allowed_origins", mode="before")
    @classmethod
    def split_origins(cls, value):
        """Accept a comma-separated string as well as a list."""
        if isinstance(value, str):
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value
    
    @field_validator("environment")
    @classmethod
    def lower_environment(cls, value: str) -> str:
        return value.strip().lower()


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)


class CacheSettings(BaseModel):
    ttl_seconds: float = Field(default=600, ge=0)
    max_entries: int = Field(default=100, ge=1)
    evict_batch: int = Field(default=50, ge=1)


class RateLimitSettings(BaseModel):
    capacity: int = Field(default=10, ge=1)
    window_seconds: float = Field(default=60, gt=0)


class FetchSettings(BaseModel):
    timeout_seconds: float = Field(default=10, gt=0)
    max_bytes: int = Field(default=1024 * 1024, ge=1)


class LoggingSettings(BaseModel):
    level: str = "INFO"


class Settings(BaseModel):
    """Validated service configuration."""
    
    app: AppSettings = Field(default_factory=AppSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    rate_limit: RateLimitSettings = Field(default_factory=RateLimitSettings)
    fetch: FetchSettings = Field(default_factory=FetchSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    
    @property
    def is_development(self) -> bool:
        return self.app.environment == "development"
    
    @classmethod
    def from_config(cls, cfg: DictConfig) -> "Settings":
        """Build settings from an OmegaConf tree, resolving env interpolations."""
        return cls.model_validate(OmegaConf.to_container(cfg, resolve=True))


def load_settings(
    path: Union[str, Path] = CONFIG_FILE,
    overrides: Optional[list[str]] = None,
) -> Settings:
    """
    Load settings from a YAML file.
    
    Args:
        path: Config file path
        overrides: Dotted ``key=value`` overrides, e.g. ``["cache.ttl_seconds=60"]``
    """
    cfg = OmegaConf.load(path)
    if overrides:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(overrides))
    return Settings.from_config(cfg)
