from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from weft.constants import CONFIG_FILE_NAME, DEFAULT_WORKFLOWS_DIR
from weft.exceptions import ConfigError
from weft.logging import get_logger

__all__ = [
    "WeftConfig",
    "PublishConfig",
    "VendorConfig",
    "load_config",
    "get_user_config_path",
]

logger = get_logger(__name__)

# Project config file consulted by the YAML source for the current load
_project_config_path: ContextVar[Path | None] = ContextVar(
    "weft_project_config_path", default=None
)


class PublishConfig(BaseModel):
    """Settings for rewriting local references into workflowspecs.

    Attributes:
        repo_slug: Origin repository in ``owner/repo`` form.
        version: Tag or branch used when no commit SHA is known.
    """

    repo_slug: str | None = None
    version: str | None = None

    @field_validator("repo_slug")
    @classmethod
    def check_repo_slug(cls, v: str | None) -> str | None:
        if v is None:
            return v
        owner, _, repo = v.partition("/")
        if not owner or not repo or "/" in repo:
            raise ValueError("repo_slug must be in format 'owner/repo'")
        return v


class VendorConfig(BaseModel):
    """Defaults for copying include dependencies into a consumer repository."""

    force: bool = False
    dry_run: bool = False


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file) as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Config file {yaml_file} must contain a mapping",
                    value=loaded,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._config_data


class WeftConfig(BaseSettings):
    """Root configuration object containing all weft settings."""

    model_config = SettingsConfigDict(
        env_prefix="WEFT_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    workflows_dir: Path = Field(default_factory=lambda: Path(DEFAULT_WORKFLOWS_DIR))
    publish: PublishConfig = Field(default_factory=PublishConfig)
    vendor: VendorConfig = Field(default_factory=VendorConfig)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Explicit keyword arguments
        2. Environment variables (WEFT_*)
        3. Project YAML config (./weft.yaml or the path given to load_config)
        4. User YAML config (~/.config/weft/config.yaml)
        """
        project_config_path = _project_config_path.get() or (
            Path.cwd() / CONFIG_FILE_NAME
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/weft/config.yaml
    """
    return Path.home() / ".config" / "weft" / "config.yaml"


def load_config(config_path: Path | None = None) -> WeftConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to project config file. Defaults to ./weft.yaml

    Returns:
        WeftConfig instance with merged configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if config_path is None:
        config_path = Path.cwd() / CONFIG_FILE_NAME

    if not config_path.exists():
        logger.info("project_config_missing", path=str(config_path))

    token = _project_config_path.set(config_path)
    try:
        return WeftConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
    finally:
        _project_config_path.reset(token)
