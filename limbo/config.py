import logging
import os
import sys
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


# =============================================================================
# Settings Sources
# =============================================================================


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by LIMBO_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        """Load config from YAML file if specified."""
        config_file = os.environ.get("LIMBO_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


# Variable names used by earlier deployments of the bot
LEGACY_ENV_VARS: dict[str, tuple[str, str | None]] = {
    "TELEGRAM_BOT_TOKEN": ("telegram", "token"),
    "ARTISTS_FILE": ("registry", "file"),
    "PORT": ("http", "port"),
    "ADMIN_ID": ("admin_identity", None),
}


class LegacyEnvSettingsSource(PydanticBaseSettingsSource):
    """Map the pre-LIMBO_ environment variable names onto the nested settings."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self().get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        for env_name, (section, key) in LEGACY_ENV_VARS.items():
            value = os.environ.get(env_name)
            if not value:
                continue
            if key is None:
                data[section] = value
            else:
                data.setdefault(section, {})[key] = value
        return data


# =============================================================================
# Application Configuration
# =============================================================================


class TelegramConfig(BaseModel):
    """Chat transport configuration (nested in Config, uses env_nested_delimiter)."""

    token: str = ""
    api_url: str = "https://api.telegram.org"
    polling: bool = True  # Run the getUpdates long-poll loop
    poll_timeout: int = 30  # Seconds the server may hold a getUpdates call
    retry_delay: float = 5.0  # Pause after a failed poll
    probe_delay: float = 1.0  # Delay before the post-registration test message


class RegistryConfig(BaseModel):
    """Artist snapshot location."""

    file: Path = Path("./artists.json")


class HttpConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from LIMBO_LOG_FILE env var."""
        return os.environ.get("LIMBO_LOG_FILE")


class LogfireConfig(BaseModel):
    """Tracing of HTTP ingress and outbound Telegram calls."""

    enabled: bool = False
    service_name: str = "limbo-notifier"


class Config(BaseSettings):
    telegram: TelegramConfig = TelegramConfig()
    registry: RegistryConfig = RegistryConfig()
    http: HttpConfig = HttpConfig()
    logging: LoggingConfig = LoggingConfig()
    logfire: LogfireConfig = LogfireConfig()
    admin_identity: str | None = None  # Channel id allowed to use /list

    model_config = {
        "env_prefix": "LIMBO_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows LIMBO_TELEGRAM__TOKEN override
        "extra": "ignore",
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config and legacy env names.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - LIMBO_* environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - LIMBO_CONFIG_FILE yaml
        5. legacy_settings - TELEGRAM_BOT_TOKEN, ARTISTS_FILE, PORT, ADMIN_ID
        6. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            LegacyEnvSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in application startup, before other modules
    are imported to ensure all loggers pick up the configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(config.level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(config.level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
