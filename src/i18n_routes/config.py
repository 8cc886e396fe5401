"""
Configuration management for i18n-routes.

Handles loading configuration from YAML files and environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from i18n_routes.errors import ConfigError
from i18n_routes.llm.factory import LLMProviderType
from i18n_routes.models import LocaleDescriptor

# Load .env file if present (before Settings initialization)
load_dotenv()

API_KEY_ENV_VARS = {
    LLMProviderType.OPENAI: ("OPENAI_KEY", "OPENAI_API_KEY"),
    LLMProviderType.OPENROUTER: ("OPENROUTER_API_KEY",),
}


class PathsConfig(BaseModel):
    """Configuration for file paths."""

    src_dir: Path = Field(default=Path("./src"))
    routes_dir: Path = Field(default=Path("./src/routes"))
    locales_dir: Path = Field(default=Path("./public/locales"))
    cache_file: Path = Field(default=Path("./.i18n-routes/store.json"))
    routes_manifest: Path = Field(default=Path("./.i18n-routes/routes.json"))

    @field_validator("src_dir", "locales_dir", "cache_file", "routes_manifest")
    @classmethod
    def expand_path(cls, v: Path) -> Path:
        """Expand user home directory and make path absolute."""
        return Path(v).expanduser().resolve()


class I18nConfig(BaseModel):
    """Locales served by the site."""

    default_locale: str = Field(default="en")
    locales: list[LocaleDescriptor] = Field(
        default_factory=lambda: [LocaleDescriptor(code="en", name="English")]
    )
    # Extract and translate tokens instead of loading the saved locale files
    generate: bool = Field(default=False)
    debug: bool = Field(default=False)

    @model_validator(mode="after")
    def check_locales(self) -> I18nConfig:
        """Require unique codes and a default locale among them."""
        codes = [locale.code for locale in self.locales]
        if not codes:
            raise ValueError("At least one locale must be configured")
        duplicates = sorted({code for code in codes if codes.count(code) > 1})
        if duplicates:
            raise ValueError(f"Duplicate locale codes: {', '.join(duplicates)}")
        if self.default_locale not in codes:
            raise ValueError(
                f"Default locale {self.default_locale!r} is not one of the locales {codes}"
            )
        return self

    @property
    def codes(self) -> list[str]:
        return [locale.code for locale in self.locales]


class TranslationConfig(BaseModel):
    """Configuration for machine translation."""

    provider: LLMProviderType = Field(default=LLMProviderType.OPENAI)
    model: str = Field(default="gpt-4")
    api_key: str = Field(default="")
    base_url: str | None = Field(default=None)
    # Language name of the default locale, used in the prompt
    source_language: str = Field(default="english")
    temperature: float = Field(default=0.3, ge=0.0, le=2.0)
    max_tokens: int = Field(default=4096, ge=256, le=32000)
    timeout_seconds: float = Field(default=120.0, ge=5.0, le=600.0)
    concurrent: bool = Field(default=True)


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO")
    file: Path | None = Field(default=None)
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    max_file_size_mb: int = Field(default=10, ge=1, le=100)
    backup_count: int = Field(default=5, ge=1, le=20)


class ProjectConfig(BaseModel):
    """Project metadata configuration."""

    name: str = Field(default="site")
    description: str = Field(default="")


class Settings(BaseSettings):
    """Main settings class that combines all configurations."""

    model_config = SettingsConfigDict(
        env_prefix="I18N_ROUTES_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    project: ProjectConfig = Field(default_factory=ProjectConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    i18n: I18nConfig = Field(default_factory=I18nConfig)
    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def __init__(self, **data: Any) -> None:
        """Initialize with environment variable fallbacks for the API key."""
        super().__init__(**data)
        if not self.translation.api_key:
            for env_var in API_KEY_ENV_VARS[self.translation.provider]:
                value = os.getenv(env_var, "")
                if value:
                    self.translation.api_key = value
                    break

    @classmethod
    def from_yaml(cls, path: Path | str) -> Settings:
        """Load settings from a YAML file, with environment variable overrides."""
        path = Path(path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}

        yaml_config = _substitute_env_vars(yaml_config)

        return cls(**yaml_config)


def _substitute_env_vars(config: dict[str, Any]) -> dict[str, Any]:
    """Recursively substitute ${ENV_VAR} patterns in config values."""
    result: dict[str, Any] = {}
    for key, value in config.items():
        if isinstance(value, dict):
            result[key] = _substitute_env_vars(value)
        elif isinstance(value, str) and value.startswith("${") and value.endswith("}"):
            result[key] = os.getenv(value[2:-1], "")
        elif isinstance(value, list):
            result[key] = [
                _substitute_env_vars(item) if isinstance(item, dict) else item for item in value
            ]
        else:
            result[key] = value
    return result


DEFAULT_CONFIG_PATHS = (
    Path("i18n-routes.yaml"),
    Path("i18n-routes.yml"),
    Path("config.yaml"),
    Path("config.yml"),
)


def load_config(path: Path | str | None = None) -> Settings:
    """
    Load configuration from YAML file or return defaults.

    Args:
        path: Path to YAML config file. If None, the default locations in the
            current directory are tried.

    Returns:
        Settings instance with merged YAML and environment configurations.

    Raises:
        ConfigError: If the file is not valid YAML or fails validation.
    """
    if path is None:
        path = next((p for p in DEFAULT_CONFIG_PATHS if p.exists()), None)

    try:
        if path is not None:
            return Settings.from_yaml(path)
        return Settings()
    except (yaml.YAMLError, ValidationError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def create_default_config(path: Path | str = "i18n-routes.yaml") -> None:
    """Create a default configuration file."""
    default_config = """# i18n-routes configuration
project:
  name: "my-site"

paths:
  # Sources scanned for i18n.path("/...") and i18n.text("...") tokens
  src_dir: "./src"
  # Route files; files below a [locale]/ directory get one route per locale
  routes_dir: "./src/routes"
  # One <code>.json dictionary per locale
  locales_dir: "./public/locales"
  # Ordered locale list read by request-time utilities
  cache_file: "./.i18n-routes/store.json"
  routes_manifest: "./.i18n-routes/routes.json"

i18n:
  default_locale: "en"
  locales:
    - code: "en"
      name: "English"
    - code: "fr"
      name: "Français"
  # true: extract and translate tokens, false: reuse the saved locale files
  generate: false
  # Verbose output
  debug: false

translation:
  # "openai" or "openrouter"
  provider: "openai"
  model: "gpt-4"
  api_key: "${OPENAI_KEY}"
  source_language: "english"
  temperature: 0.3
  # Translate all locales at once
  concurrent: true

logging:
  level: "INFO"
"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(default_config)
