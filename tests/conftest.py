"""Pytest configuration and shared fixtures for ptrconfine tests

This module provides common fixtures and test utilities used across
unit tests: reference regions, their outlines, and settings isolation.
"""

import pytest
import logging
from typing import Generator

from ptrconfine.common.config import ConfigLoader
from ptrconfine.common.settings import settings
from ptrconfine.common.types import Box
from ptrconfine.geometry.outline import Outline, outline_extract
from ptrconfine.geometry.region import Region


@pytest.fixture
def square_region() -> Region:
    """Single 10x10 box at the origin"""
    return Region.from_boxes([Box(0, 0, 10, 10)])


@pytest.fixture
def square_outline(square_region: Region) -> Outline:
    """Outline of the single-box region"""
    return outline_extract(square_region)


@pytest.fixture
def l_region() -> Region:
    """L-shape: a 10x10 box with a 10x5 box attached to the right of its top half"""
    return Region.from_boxes([Box(0, 0, 10, 10), Box(10, 0, 20, 5)])


@pytest.fixture
def frame_region() -> Region:
    """30x30 square with a 10x10 hole in the middle

    Returns:
        Region with one hole at (10, 10)-(20, 20)
    """
    return Region.from_boxes([
        Box(0, 0, 30, 10),
        Box(0, 10, 10, 20), Box(20, 10, 30, 20),
        Box(0, 20, 30, 30),
    ])


@pytest.fixture
def reset_settings() -> Generator[None, None, None]:
    """Reset settings singleton between tests

    This fixture ensures each test gets a fresh Settings instance.
    """
    settings._initialized = False
    settings._config = None
    yield
    settings._initialized = False
    settings._config = None


@pytest.fixture
def no_config_files(monkeypatch) -> None:
    """Hide config files in standard locations from ConfigLoader"""
    monkeypatch.setattr(ConfigLoader, "DEFAULT_CONFIG_PATHS", [])


@pytest.fixture(autouse=True)
def setup_logging(caplog):
    """Setup logging for tests"""
    caplog.set_level(logging.DEBUG)


# Markers for test organization
def pytest_configure(config) -> None:
    """Register custom pytest markers used by this test suite."""
    config.addinivalue_line("markers", "requires_x11: mark test as requiring X11 display")
