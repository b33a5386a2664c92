import copy
import logging
import os
from pathlib import Path
from typing import Any

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import InterpolationResolutionError

from termlight.constants import (
    COLORFGBG_ENV_VAR,
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_FILE,
    DEFAULT_DARK_THRESHOLD,
    DEFAULT_LIGHT_THRESHOLD,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_TIMEOUT_MS,
)

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Load YAML configuration and merge it over built-in defaults."""

    def __init__(self) -> None:
        """Initialize ConfigLoader with built-in defaults."""
        self.BUILT_IN_DEFAULTS = {
            "timeout_ms": round(DEFAULT_TIMEOUT_SECONDS * 1000),
            "env_var": COLORFGBG_ENV_VAR,
            "dark_threshold": DEFAULT_DARK_THRESHOLD,
            "light_threshold": DEFAULT_LIGHT_THRESHOLD,
            "skip_terminal_query": False,
        }

    def load_config(self, config_path: str | None = None) -> dict[str, Any]:
        """Load configuration from YAML file.

        Parameters
        ----------
        config_path : str | None
            Path to YAML config file. If None, checks TERMLIGHT_CONFIG env var,
            then falls back to termlight.yaml

        Returns
        -------
        dict[str, Any]
            Parsed configuration with all variable interpolations resolved,
            or an empty dict when the file does not exist

        Raises
        ------
        ValueError
            If the file is not valid YAML or a variable cannot be resolved
        RuntimeError
            If the file exists but cannot be read
        """
        if config_path is None:
            config_path = os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE)

        config_file = Path(config_path)

        if not config_file.exists():
            logger.debug("Config file %s not found, using built-in defaults", config_file)
            return {}

        try:
            cfg = OmegaConf.load(config_file)
        except yaml.YAMLError as e:
            logger.error("Failed to parse YAML config file %s: %s", config_file, e)
            raise ValueError(f"Invalid YAML in {config_file}: {e}") from e
        except OSError as e:
            logger.error("Failed to read config file %s: %s", config_file, e)
            raise RuntimeError(f"Failed to read config file {config_file}: {e}") from e

        if cfg is None:
            return {}

        if not OmegaConf.is_dict(cfg):
            raise ValueError(f"Config file {config_file} must contain a mapping")

        if "vars" in cfg:
            vars_dict = OmegaConf.to_container(cfg.vars, resolve=False)
            for key, value in vars_dict.items():
                if key not in cfg:
                    cfg[key] = value

        try:
            config = OmegaConf.to_container(cfg, resolve=True, throw_on_missing=True)
        except InterpolationResolutionError as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise ValueError(f"Configuration variable resolution error: {e}") from e
        except (KeyError, AttributeError) as e:
            logger.error("Failed to resolve configuration variables: %s", e)
            raise ValueError(f"Configuration variable resolution error: {e}") from e

        config.pop("vars", None)
        return config

    def get_config(
        self, config: dict[str, Any], overrides: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Merge built-in defaults, file settings and explicit overrides.

        Parameters
        ----------
        config : dict[str, Any]
            Configuration loaded from YAML
        overrides : dict[str, Any] | None
            Values given on the command line; None entries are ignored

        Returns
        -------
        dict[str, Any]
            Merged and validated configuration
        """
        merged = copy.deepcopy(self.BUILT_IN_DEFAULTS)

        for key, value in config.items():
            if key not in merged:
                logger.warning("Ignoring unknown configuration key: %s", key)
                continue
            merged[key] = value

        for key, value in (overrides or {}).items():
            if value is not None:
                merged[key] = value

        self.validate_config(merged)
        return merged

    def validate_config(self, config: dict[str, Any]) -> None:
        """Validate configuration field types and ranges.

        Parameters
        ----------
        config : dict[str, Any]
            Configuration to validate

        Raises
        ------
        ValueError
            If configuration is invalid
        """
        self._validate_timeout(config)
        self._validate_env_var(config)
        self._validate_thresholds(config)

        if not isinstance(config.get("skip_terminal_query", False), bool):
            raise ValueError("skip_terminal_query must be a boolean")

    def _validate_timeout(self, config: dict[str, Any]) -> None:
        timeout_ms = config.get("timeout_ms")

        if isinstance(timeout_ms, bool) or not isinstance(timeout_ms, int):
            raise ValueError("timeout_ms must be an integer")

        if not (1 <= timeout_ms <= MAX_TIMEOUT_MS):
            raise ValueError(f"timeout_ms must be between 1 and {MAX_TIMEOUT_MS}")

    def _validate_env_var(self, config: dict[str, Any]) -> None:
        env_var = config.get("env_var")

        if not isinstance(env_var, str) or env_var == "":
            raise ValueError("env_var must be a non-empty string")

    def _validate_thresholds(self, config: dict[str, Any]) -> None:
        """Validate luma thresholds used to classify the background.

        Parameters
        ----------
        config : dict[str, Any]
            Configuration to validate

        Raises
        ------
        ValueError
            If a threshold is not a number in [0, 1] or they are out of order
        """
        for field in ("dark_threshold", "light_threshold"):
            value = config.get(field)

            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"{field} must be a number")

            if not (0 <= value <= 1):
                raise ValueError(f"{field} must be between 0 and 1")

        if config["dark_threshold"] > config["light_threshold"]:
            raise ValueError(
                f"dark_threshold ({config['dark_threshold']}) must not exceed "
                f"light_threshold ({config['light_threshold']})"
            )
