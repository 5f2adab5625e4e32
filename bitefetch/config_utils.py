# config_utils.py - Configuration for bitefetch
"""
bitefetch configuration utilities with YAML file support.

Configuration Resolution Order (highest to lowest priority):
1. Environment variables (PYBITES_API_KEY, PYBITES_API_URL)
2. YAML config file (PYBITES_CONFIG, or ~/.pybites/config.yaml)
3. Built-in defaults (rustplatform.com API, ./exercises)

Usage:
    from bitefetch.config_utils import get_config

    config = get_config()
    print(config.api_url)
    print(config.output_dir)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from bitefetch.errors import ConfigurationError
from bitefetch.security_utils import mask_sensitive

logger = logging.getLogger(__name__)

API_URL = "https://rustplatform.com/api/"
API_KEY_ENV_VAR = "PYBITES_API_KEY"
API_URL_ENV_VAR = "PYBITES_API_URL"
CONFIG_ENV_VAR = "PYBITES_CONFIG"
EXERCISES_DIRNAME = "exercises"

GLOBAL_CONFIG_PATH = Path.home() / ".pybites" / "config.yaml"


@dataclass
class BitefetchConfig:
    """Complete bitefetch configuration"""
    api_url: str = API_URL
    api_key: Optional[str] = None
    output_dir: Optional[Path] = None

    # Track where values came from (for debugging)
    _sources: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.output_dir is None:
            self.output_dir = Path.cwd() / EXERCISES_DIRNAME

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    def source_of(self, attr: str) -> str:
        return self._sources.get(attr, "default")


class ConfigLoader:
    """Load configuration from multiple sources"""

    def __init__(
        self,
        cwd: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.cwd = Path(cwd) if cwd else Path.cwd()
        self.environ = os.environ if environ is None else environ
        self.config = BitefetchConfig(output_dir=self.cwd / EXERCISES_DIRNAME)

    def load(self) -> BitefetchConfig:
        """Load configuration from all sources in priority order"""
        # Lowest priority first, later sources overwrite
        self._load_yaml_config()
        self._load_env_vars()
        return self.config

    def _config_path(self) -> Path:
        override = self.environ.get(CONFIG_ENV_VAR)
        if override:
            return Path(override).expanduser()
        return GLOBAL_CONFIG_PATH

    def _load_yaml_config(self):
        path = self._config_path()
        if not path.exists():
            if self.environ.get(CONFIG_ENV_VAR):
                raise ConfigurationError(
                    message=f"Config file not found: {path}",
                    suggestion=f"Create the file or unset {CONFIG_ENV_VAR}",
                    context={"env_var": CONFIG_ENV_VAR, "path": str(path)},
                )
            return
        self._load_yaml_file(path, path.name)

    def _load_yaml_file(self, path: Path, source_name: str):
        """Load settings from a YAML file"""
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to parse %s: %s", path, e)
            return

        if not isinstance(data, dict):
            logger.warning("Ignoring %s: expected a mapping at the top level", path)
            return

        if data.get("api_url"):
            self.config.api_url = str(data["api_url"])
            self.config._sources["api_url"] = source_name

        if data.get("api_key"):
            self.config.api_key = str(data["api_key"])
            self.config._sources["api_key"] = source_name

        if data.get("output_dir"):
            output_dir = Path(str(data["output_dir"])).expanduser()
            if not output_dir.is_absolute():
                output_dir = self.cwd / output_dir
            self.config.output_dir = output_dir
            self.config._sources["output_dir"] = source_name

    def _load_env_vars(self):
        # An empty PYBITES_API_KEY counts as unset
        api_key = self.environ.get(API_KEY_ENV_VAR)
        if api_key:
            self.config.api_key = api_key
            self.config._sources["api_key"] = "env"

        api_url = self.environ.get(API_URL_ENV_VAR)
        if api_url:
            self.config.api_url = api_url
            self.config._sources["api_url"] = "env"


def get_config(cwd: Optional[Path] = None) -> BitefetchConfig:
    """Load configuration from env vars and the YAML config file"""
    return ConfigLoader(cwd).load()


def describe_config(config: BitefetchConfig) -> Dict[str, Any]:
    """Summarize config for debug logging, with the API key masked"""
    return {
        "api_url": f"{config.api_url} ({config.source_of('api_url')})",
        "api_key": (
            f"{mask_sensitive(config.api_key)} ({config.source_of('api_key')})"
            if config.has_api_key else "not set"
        ),
        "output_dir": f"{config.output_dir} ({config.source_of('output_dir')})",
    }
