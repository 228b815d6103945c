from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from functools import lru_cache
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional


class ConfigError(Exception):
    """The provider configuration file itself is unusable."""


class Settings(BaseSettings):
    PROVIDERS_PATH: str = Field("data/providers.yaml", description="YAML file with user-defined providers")
    PROVIDER_TIMEOUT_SECONDS: float = Field(12.0, description="Deadline for each provider call")
    MAX_RESULTS: int = 15
    CONTENT_MAX_CHARS: int = 500
    USER_AGENT: str = "bplus/1.0"
    NATIVE_SEARCH_ENABLED: bool = Field(True, description="Include the built-in public JSON providers")
    DB_PATH: str = Field("./history.sqlite", description="Path to SQLite history database")
    LOG_LEVEL: str = "INFO"

    # Self-hosted SearXNG
    SEARXNG_URL: Optional[str] = Field(None, description="Base URL of a SearXNG instance")
    AUTH_USERNAME: Optional[str] = None
    AUTH_PASSWORD: Optional[str] = None

    # MLflow settings
    MLFLOW_TRACKING_URI: str = Field("http://127.0.0.1:5000", description="MLflow tracking server URI")
    MLFLOW_ENABLE_TRACING: bool = Field(False, description="Enable MLflow tracing")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

@lru_cache()
def get_settings() -> Settings:
    return Settings()

def load_provider_records(path: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Reads the raw provider records from YAML.

    Accepts either a top-level list or a mapping with a `providers` list.
    A missing file means no user providers.
    """
    path = Path(path or get_settings().PROVIDERS_PATH)
    if not path.exists():
        return []
    with open(path, "r") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"{path} is not valid YAML: {e}") from e

    if data is None:
        return []
    if isinstance(data, dict):
        data = data.get("providers", [])
    if not isinstance(data, list):
        raise ConfigError(f"{path} must hold a list of providers")

    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise ConfigError(f"{path}: provider #{i + 1} is not a mapping")
    return data
