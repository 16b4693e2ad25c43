"""Configuration loading with pydantic-settings.

Sources, highest priority first:
1. Direct kwargs
2. Environment variables (FILESEEK__SECTION__KEY)
3. Explicit config file (``--config``), if given
4. Project config (<root>/.fileseek/config.yaml)
5. Global config (~/.config/fileseek/config.yaml)
6. Built-in defaults
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from fileseek.config.models import (
    FileSeekConfig,
    LoggingConfig,
    ScannerConfig,
    SearchConfig,
    WatcherConfig,
)
from fileseek.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/fileseek/config.yaml").expanduser()
PROJECT_CONFIG_DIR = ".fileseek"
PROJECT_CONFIG_NAME = "config.yaml"


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top level must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlSource(PydanticBaseSettingsSource):
    """Settings source that reads from pre-loaded YAML config."""

    def __init__(self, settings_cls: type[BaseSettings], yaml_config: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._yaml_config = yaml_config

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        val = self._yaml_config.get(field_name)
        return val, field_name, val is not None

    def __call__(self) -> dict[str, Any]:
        return self._yaml_config


def _make_settings_class(yaml_config: dict[str, Any]) -> type[BaseSettings]:
    """Create a Settings class bound to one YAML snapshot (no shared state)."""

    class FileSeekSettings(BaseSettings):
        """Root config. Env vars: FILESEEK__LOGGING__LEVEL, FILESEEK__SCANNER__MAX_FILES, etc."""

        model_config = SettingsConfigDict(
            env_prefix="FILESEEK__",
            env_nested_delimiter="__",
            case_sensitive=False,
        )

        logging: LoggingConfig = LoggingConfig()
        scanner: ScannerConfig = ScannerConfig()
        search: SearchConfig = SearchConfig()
        watcher: WatcherConfig = WatcherConfig()

        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # Precedence (first wins): init kwargs > env vars > yaml files
            return (init_settings, env_settings, _YamlSource(settings_cls, yaml_config))

    return FileSeekSettings


def project_config_path(root: Path) -> Path:
    return root / PROJECT_CONFIG_DIR / PROJECT_CONFIG_NAME


def load_config(
    root: Path | None = None,
    *,
    config_path: Path | None = None,
    **kwargs: Any,
) -> FileSeekConfig:
    """Load config: defaults < global < project < explicit file < env vars < kwargs.

    Args:
        root: Project root to look for .fileseek/config.yaml in.
              Defaults to current working directory.
        config_path: Extra YAML file layered over the project config.
                     Must exist when given.
        **kwargs: Override values per section (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: Missing explicit file, invalid YAML, or validation errors.
    """
    root = root or Path.cwd()

    yaml_config = _load_yaml(GLOBAL_CONFIG_PATH)
    yaml_config = _deep_merge(yaml_config, _load_yaml(project_config_path(root)))

    if config_path is not None:
        if not config_path.exists():
            raise ConfigError.file_not_found(str(config_path))
        yaml_config = _deep_merge(yaml_config, _load_yaml(config_path))

    settings_cls = _make_settings_class(yaml_config)
    try:
        settings = settings_cls(**kwargs)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e

    return FileSeekConfig.model_validate(settings.model_dump())
