"""
Configuration management for the puncher
"""

import logging
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError

from puncher.constants import (
    API_KEY_ENV_VAR,
    APP_NAME,
    CONFIG_DIR_NAME,
    CONFIG_ENV_VAR,
    CONFIG_FILE_NAME,
    DEFAULT_COST_CENTRE,
    DEFAULT_HTTP_TIMEOUT,
    ISO27_COST_CENTRE,
    KIHO_API_URL,
)
from puncher.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_RECURRING_TASKS = [
    "Group A | Dummy task A-1",
    "Group A | Dummy task A-2",
    "Group B | Dummy task B-1",
    "Misc task description I",
    "Misc task description II",
    "Misc task description III",
]


def default_config_path() -> Path:
    return Path.home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


class ApiSettings(BaseModel):
    """Worktime API endpoint settings"""
    url: str = KIHO_API_URL
    timeout_s: int = DEFAULT_HTTP_TIMEOUT


class CostCentreRule(BaseModel):
    """Use cost centre `id` when the description contains `keyword`"""
    keyword: str
    id: int


class PuncherConfig(BaseModel):
    """Main puncher configuration"""
    title: str = f"Configuration file for '{APP_NAME}'"
    api_key: str = "Ask API Key from administrator"
    updated: str = Field(default_factory=lambda: date.today().strftime("%d.%m.%Y"))
    recurring_tasks: List[str] = Field(default_factory=lambda: list(DEFAULT_RECURRING_TASKS))
    cost_centres: Dict[str, str] = Field(
        default_factory=lambda: {"000000": "Example default customer cost centre"}
    )
    cost_centre_rules: List[CostCentreRule] = Field(
        default_factory=lambda: [CostCentreRule(keyword="ISO27", id=ISO27_COST_CENTRE)]
    )
    default_cost_centre: int = DEFAULT_COST_CENTRE
    api: ApiSettings = Field(default_factory=ApiSettings)


@dataclass(frozen=True)
class RuntimeSettings:
    """Command line flags, built once per run and passed where needed."""
    verbose: int = 0
    dry_run: bool = False
    config_path: Optional[Path] = None


def config_search_paths(config_path: Optional[Path] = None) -> List[Path]:
    """
    Candidate config files in priority order.

    1. Provided config_path
    2. $PUNCHER_CONFIG
    3. ~/.kiho-puncher/config.yaml
    """
    search_paths = []
    if config_path:
        search_paths.append(Path(config_path))
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        search_paths.append(Path(env_path))
    search_paths.append(default_config_path())
    return search_paths


def resolve_config_path(config_path: Optional[Path] = None) -> Path:
    """Return the config file that is (or would be) used."""
    search_paths = config_search_paths(config_path)
    for path in search_paths:
        if path.exists():
            return path
    return search_paths[0]


def _read_config_file(path: Path) -> dict:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Loading configuration from '{path}' failed: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in '{path}' must be a mapping, got {type(data).__name__}")
    return data


def load_config(config_path: Optional[Path] = None, create: bool = True) -> PuncherConfig:
    """
    Load configuration from YAML file.

    When no config file exists yet, the defaults are written to the first
    search path so the user has a file to edit. The API key can always be
    overridden with $KIHO_API_KEY (also read from a .env file).
    """
    load_dotenv(find_dotenv(usecwd=True))

    path = resolve_config_path(config_path)
    if path.exists():
        logger.info(f"Loading configuration from '{path}'")
        config_data = _read_config_file(path)
        try:
            config = PuncherConfig(**config_data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid configuration in '{path}':\n{exc}") from exc
    else:
        config = PuncherConfig()
        if create:
            logger.info(f"No configuration found, writing defaults to '{path}'")
            save_config(config, path)

    env_api_key = os.getenv(API_KEY_ENV_VAR)
    if env_api_key:
        config.api_key = env_api_key

    return config


def save_config(config: PuncherConfig, path: Optional[Path] = None):
    """Save configuration to YAML file."""
    if path is None:
        path = default_config_path()

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(
            config.model_dump(),
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
