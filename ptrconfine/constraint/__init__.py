"""Confinement strategies and the host pointer-seat seam."""

from ptrconfine.constraint.backend import PointerConstraint, PointerSeat
from ptrconfine.constraint.factory import constraint_create, constraintFromConfig_create
from ptrconfine.constraint.native import NativePointerConstraint
from ptrconfine.constraint.recheck import pointer_recheck

__all__ = [
    "NativePointerConstraint",
    "PointerConstraint",
    "PointerSeat",
    "constraint_create",
    "constraintFromConfig_create",
    "pointer_recheck",
]
