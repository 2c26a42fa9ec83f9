# core/config.py
from functools import lru_cache
from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_dependencies() -> Dict[str, str]:
    return {
        "Microsoft.Extensions.DependencyInjection": "9.0.0",
        "Microsoft.Extensions.Logging.Console": "9.0.0",
    }


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FLOWFORGE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "FlowForge Generator"
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    default_target_framework: str = Field(default="net10.0")
    default_template: str = Field(default="standard")
    default_dependencies: Dict[str, str] = Field(default_factory=_default_dependencies)

    output_root: str = Field(default="./generated")
    project_path_prefix: str = Field(default="/projects")

    # Seconds slept before each emission phase; 0 disables.
    phase_delay: float = Field(default=0.0, ge=0.0)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
