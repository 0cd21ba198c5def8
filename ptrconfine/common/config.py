"""Configuration file loading and management"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

WL_FIXED_STEP: float = 1.0 / 256.0
DEFAULT_MIN_EDGE_DISTANCE: float = 0.0
DEFAULT_BACKEND: str = "native"
DEFAULT_LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class ConstraintConfig:
    """Pointer constraint settings"""
    backend: str = DEFAULT_BACKEND
    min_edge_distance: float = DEFAULT_MIN_EDGE_DISTANCE
    fixed_step: float = WL_FIXED_STEP
    origin: tuple[float, float] = (0.0, 0.0)


@dataclass
class LoggingConfig:
    """Logging configuration settings"""
    level: str = "INFO"
    file: Optional[str] = None
    format: str = DEFAULT_LOG_FORMAT


@dataclass
class Config:
    """Complete application configuration"""
    constraint: ConstraintConfig = field(default_factory=ConstraintConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """Loads and parses configuration from YAML files"""

    DEFAULT_CONFIG_PATHS = [
        "config.yml",
        "~/.config/ptrconfine/config.yml",
        "/etc/ptrconfine/config.yml",
    ]

    @staticmethod
    def configFile_find() -> Optional[Path]:
        """
        Find configuration file in standard locations

        Returns:
            Path to config file, or None if not found
        """
        for config_path in ConfigLoader.DEFAULT_CONFIG_PATHS:
            path = Path(config_path).expanduser().resolve()
            if path.exists() and path.is_file():
                return path
        return None

    @staticmethod
    def yaml_load(file_path: Path) -> Dict[str, Any]:
        """
        Load YAML configuration file

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed configuration dictionary

        Raises:
            FileNotFoundError: If file does not exist
            yaml.YAMLError: If file is not valid YAML
            ValueError: If the document is not a mapping
        """
        with open(file_path, "r") as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Config file {file_path} must contain a YAML dictionary")

        return data

    @staticmethod
    def origin_parse(value: Any) -> tuple[float, float]:
        """
        Parse an [x, y] origin pair

        Args:
            value: Raw YAML value

        Returns:
            Origin as a float tuple

        Raises:
            ValueError: If value is not a two-element numeric sequence
        """
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise ValueError(f"constraint.origin must be a list of two numbers, got {value!r}")
        try:
            return (float(value[0]), float(value[1]))
        except (TypeError, ValueError) as e:
            raise ValueError(f"constraint.origin must be numeric, got {value!r}") from e

    @staticmethod
    def config_parse(data: Dict[str, Any]) -> Config:
        """
        Parse configuration dictionary into Config object

        Missing sections and keys fall back to defaults.

        Args:
            data: Raw configuration dictionary

        Returns:
            Parsed Config object

        Raises:
            ValueError: If a value is out of range
        """
        # Parse constraint config
        constraint_data = data.get("constraint") or {}
        constraint = ConstraintConfig(
            backend=str(constraint_data.get("backend", DEFAULT_BACKEND)),
            min_edge_distance=float(
                constraint_data.get("min_edge_distance", DEFAULT_MIN_EDGE_DISTANCE)
            ),
            fixed_step=float(constraint_data.get("fixed_step", WL_FIXED_STEP)),
            origin=ConfigLoader.origin_parse(constraint_data.get("origin", [0, 0])),
        )
        if constraint.min_edge_distance < 0:
            raise ValueError(
                f"constraint.min_edge_distance must be >= 0, got {constraint.min_edge_distance}"
            )
        if constraint.fixed_step < 0:
            raise ValueError(f"constraint.fixed_step must be >= 0, got {constraint.fixed_step}")

        # Parse logging config
        logging_data = data.get("logging") or {}
        logging = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            file=logging_data.get("file"),
            format=logging_data.get("format", DEFAULT_LOG_FORMAT),
        )

        return Config(constraint=constraint, logging=logging)

    @staticmethod
    def config_load(file_path: Optional[Path] = None) -> Config:
        """
        Load configuration from file

        Args:
            file_path: Optional path to config file. If None, searches standard locations.

        Returns:
            Parsed Config object

        Raises:
            FileNotFoundError: If config file not found
            ValueError: If config file is invalid
        """
        if file_path is None:
            file_path = ConfigLoader.configFile_find()
            if file_path is None:
                raise FileNotFoundError(
                    f"Config file not found in standard locations: "
                    f"{ConfigLoader.DEFAULT_CONFIG_PATHS}"
                )

        data = ConfigLoader.yaml_load(file_path)
        return ConfigLoader.config_parse(data)

    @staticmethod
    def configWithOverrides_load(
        file_path: Optional[Path] = None,
        **overrides: Any
    ) -> Config:
        """
        Load configuration and apply command-line overrides

        Without an explicit file, a missing config file is not an error: the
        defaults are used instead.

        Args:
            file_path: Optional path to config file
            **overrides: Key-value pairs to override config values

        Returns:
            Config object with overrides applied

        Example:
            config = ConfigLoader.configWithOverrides_load(
                min_edge_distance=1.0,
                fixed_step=0.0,
                origin=(100, 200),
            )
        """
        if file_path is None and ConfigLoader.configFile_find() is None:
            config = Config()
        else:
            config = ConfigLoader.config_load(file_path)

        if overrides.get("backend") is not None:
            config.constraint.backend = overrides["backend"]
        if overrides.get("min_edge_distance") is not None:
            if overrides["min_edge_distance"] < 0:
                raise ValueError(
                    f"min_edge_distance must be >= 0, got {overrides['min_edge_distance']}"
                )
            config.constraint.min_edge_distance = float(overrides["min_edge_distance"])
        if overrides.get("fixed_step") is not None:
            if overrides["fixed_step"] < 0:
                raise ValueError(f"fixed_step must be >= 0, got {overrides['fixed_step']}")
            config.constraint.fixed_step = float(overrides["fixed_step"])
        if overrides.get("origin") is not None:
            config.constraint.origin = ConfigLoader.origin_parse(list(overrides["origin"]))
        if overrides.get("log_level") is not None:
            config.logging.level = overrides["log_level"]

        return config
