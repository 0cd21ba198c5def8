"""Pure geometry of pointer confinement: regions, outlines, clamping, recovery."""

from ptrconfine.geometry.confine import ConfinedMotion, motion_confine, motion_trace
from ptrconfine.geometry.outline import Outline, outline_extract
from ptrconfine.geometry.recover import position_recover
from ptrconfine.geometry.region import Region, RegionError

__all__ = [
    "ConfinedMotion",
    "Outline",
    "Region",
    "RegionError",
    "motion_confine",
    "motion_trace",
    "outline_extract",
    "position_recover",
]
