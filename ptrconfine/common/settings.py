"""Application settings singleton - single source of truth for configuration

This module provides a singleton Settings class that consolidates:
1. Coordinate representation constants (wire-format resolution)
2. Confinement defaults used when config.yml omits a value
3. Runtime configuration from config.yml

Usage:
    from ptrconfine.common.settings import settings

    # Initialize once at startup with loaded config
    config = ConfigLoader.config_load()
    settings.initialize(config)

    # Use anywhere in the application
    step = settings.config.constraint.fixed_step
"""

from typing import Optional

from ptrconfine.common.config import (
    DEFAULT_BACKEND,
    DEFAULT_MIN_EDGE_DISTANCE,
    WL_FIXED_STEP,
    Config,
)


class Settings:
    """Singleton settings manager combining config.yml and engine constants

    The singleton pattern ensures all parts of the application use the same
    configuration values and coordinate constants.
    """

    _instance: Optional["Settings"] = None

    def __new__(cls) -> "Settings":
        """Ensure only one Settings instance exists"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize settings singleton (only runs once)"""
        if hasattr(self, "_initialized"):
            return
        self._initialized = True
        self._config: Optional[Config] = None

    def initialize(self, config: Config) -> None:
        """
        Initialize with loaded configuration

        Args:
            config: Parsed configuration
        """
        self._config = config

    # =========================================================================
    # Coordinate Constants
    # =========================================================================

    WL_FIXED_STEP: float = WL_FIXED_STEP
    """Smallest positive value representable as a Wayland wl_fixed_t

    Pointer coordinates cross the compositor boundary as 24.8 fixed point.
    Motions in a positive direction are nudged by this step before clamping
    so a value that would round up past a border is still clamped, and
    recovered positions are placed this far inside the nearest border.
    """

    # =========================================================================
    # Confinement Defaults
    # =========================================================================

    DEFAULT_MIN_EDGE_DISTANCE: float = DEFAULT_MIN_EDGE_DISTANCE
    """Distance kept from right/bottom borders when clamping (pixels)"""

    DEFAULT_BACKEND: str = DEFAULT_BACKEND
    """Confinement strategy used when config.yml names none"""

    # =========================================================================
    # Runtime Configuration Access
    # =========================================================================

    @property
    def config(self) -> Config:
        """
        Get loaded configuration object

        Raises:
            RuntimeError: If initialize() has not been called
        """
        if self._config is None:
            raise RuntimeError("Settings not initialized. Call settings.initialize(config) first.")
        return self._config


# Global singleton instance
settings = Settings()
"""Global settings singleton instance

Import this anywhere in the application:
    from ptrconfine.common.settings import settings
"""
