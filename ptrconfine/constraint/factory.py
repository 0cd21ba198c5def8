"""Constraint factory functions."""

from __future__ import annotations

from ptrconfine.common.config import ConstraintConfig
from ptrconfine.common.types import Point
from ptrconfine.constraint.backend import PointerConstraint
from ptrconfine.constraint.native import NativePointerConstraint
from ptrconfine.geometry.region import Region


def constraint_create(
    backend_name: str,
    region: Region,
    origin: Point,
    min_edge_distance: float,
    fixed_step: float,
) -> PointerConstraint:
    """
    Create a confinement strategy by name.

    Args:
        backend_name: Strategy identifier (e.g., "native")
        region: Confinement region, relative to origin
        origin: Absolute position of the region's coordinate space
        min_edge_distance: Margin kept from bottom/right borders
        fixed_step: Minimal representable coordinate step

    Returns:
        PointerConstraint implementation

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = backend_name.lower()

    if backend == "native":
        return NativePointerConstraint(
            region=region,
            origin=origin,
            min_edge_distance=min_edge_distance,
            fixed_step=fixed_step,
        )

    raise ValueError(f"Unsupported constraint backend '{backend_name}'. Supported: native.")


def constraintFromConfig_create(config: ConstraintConfig, region: Region) -> PointerConstraint:
    """
    Create the confinement strategy described by a config section.

    Args:
        config: Parsed constraint configuration
        region: Confinement region, relative to the configured origin

    Returns:
        PointerConstraint implementation
    """
    origin_x, origin_y = config.origin
    return constraint_create(
        backend_name=config.backend,
        region=region,
        origin=Point(x=origin_x, y=origin_y),
        min_edge_distance=config.min_edge_distance,
        fixed_step=config.fixed_step,
    )
