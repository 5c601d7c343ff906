"""
Loading and saving of the switching deadline settings.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from switching_deadlines.data.schemas import Config

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "settings.yaml"


class ConfigManager:
    """Reads settings.yaml and SWITCHING_* environment variables into a Config."""

    ENV_MAPPINGS = {
        "SWITCHING_USE_SPECIAL_HOLIDAYS": "use_special_holidays",
        "SWITCHING_MAX_SCAN_DAYS": "max_scan_days",
        "SWITCHING_OUTPUT_FORMAT": "output_format",
        "SWITCHING_OUTPUT_DIRECTORY": "output_directory",
        "SWITCHING_API_HOST": "api_host",
        "SWITCHING_API_PORT": "api_port",
        "SWITCHING_LOG_LEVEL": "log_level",
    }

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the config manager.

        Args:
            config_path: Optional path to config file. If not provided, uses default.
        """
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    def load_config(self) -> Config:
        """
        Load the settings file and apply SWITCHING_* overrides.

        Returns:
            Validated Config.

        Raises:
            ValueError: If the file or a value is invalid.
        """
        config_dict = self._load_yaml()
        config_dict = self._apply_env_overrides(config_dict)

        try:
            return Config(**config_dict)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration: {e}") from e

    def _load_yaml(self) -> Dict[str, Any]:
        """Read and flatten the YAML file, or return an empty dict if it is missing."""
        if not self.config_path.exists():
            logger.debug(f"Config file not found: {self.config_path}, using defaults")
            return {}

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid configuration: error parsing YAML file {self.config_path}: {e}") from e

        logger.debug(f"Loaded config from: {self.config_path}")
        if not config:
            return {}
        if not isinstance(config, dict):
            raise ValueError(f"Invalid configuration: {self.config_path} must contain a mapping")
        return self._flatten_config(config)

    def _flatten_config(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Map the calendar/output/api/logging sections onto Config fields.

        Args:
            config: Parsed YAML mapping.

        Returns:
            Flat dictionary keyed by Config field names.
        """
        result: Dict[str, Any] = {}

        calendar = config.get("calendar") or {}
        if "use_special_holidays" in calendar:
            result["use_special_holidays"] = calendar["use_special_holidays"]
        if "max_scan_days" in calendar:
            result["max_scan_days"] = calendar["max_scan_days"]
        if calendar.get("custom_holidays"):
            result["custom_holidays"] = calendar["custom_holidays"]

        output = config.get("output") or {}
        if "format" in output:
            result["output_format"] = output["format"]
        if "directory" in output:
            result["output_directory"] = output["directory"]

        api = config.get("api") or {}
        if "host" in api:
            result["api_host"] = api["host"]
        if "port" in api:
            result["api_port"] = api["port"]

        log = config.get("logging") or {}
        if "level" in log:
            result["log_level"] = log["level"]

        return result

    def _apply_env_overrides(self, config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Override settings from SWITCHING_* environment variables.

        Invalid values for typed fields are skipped with a warning.

        Args:
            config_dict: Flat settings from the YAML file.

        Returns:
            The same dictionary with overrides applied.
        """
        converters = {
            "use_special_holidays": self._parse_bool,
            "max_scan_days": int,
            "api_port": int,
        }

        for env_var, config_key in self.ENV_MAPPINGS.items():
            env_value = os.environ.get(env_var)
            if env_value is None:
                continue
            converter = converters.get(config_key, str)
            try:
                config_dict[config_key] = converter(env_value)
            except ValueError:
                logger.warning(f"Ignoring invalid value for {env_var}: {env_value!r}")
                continue
            logger.debug(f"Override from env: {env_var} -> {config_key}")

        return config_dict

    @staticmethod
    def _parse_bool(value: str) -> bool:
        """Parse a boolean from string."""
        normalized = value.strip().lower()
        if normalized in ("true", "1", "yes", "on"):
            return True
        if normalized in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"Not a boolean: {value}")

    def save_config(self, config: Config, output_path: Optional[str] = None) -> None:
        """
        Write a Config back in the nested settings.yaml layout.

        Args:
            config: Settings to write.
            output_path: Optional output path. If not provided, uses default.
        """
        save_path = Path(output_path) if output_path else self.config_path

        config_dict = {
            "calendar": {
                "use_special_holidays": config.use_special_holidays,
                "max_scan_days": config.max_scan_days,
                "custom_holidays": [
                    h.model_dump(mode="json", exclude_none=True) for h in config.custom_holidays
                ],
            },
            "output": {
                "format": config.output_format,
                "directory": config.output_directory,
            },
            "api": {
                "host": config.api_host,
                "port": config.api_port,
            },
            "logging": {
                "level": config.log_level,
            },
        }

        save_path.parent.mkdir(parents=True, exist_ok=True)

        with open(save_path, "w", encoding="utf-8") as f:
            yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False, allow_unicode=True)

        logger.info(f"Saved configuration to: {save_path}")
