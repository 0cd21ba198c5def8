"""X11 pointer seat: query and warp the core pointer"""

import logging
import math
from typing import Optional

from Xlib import display as xdisplay
from Xlib.display import Display

from ptrconfine.common.types import Point
from ptrconfine.constraint.backend import PointerSeat

logger = logging.getLogger(__name__)


class X11PointerSeat(PointerSeat):
    """PointerSeat backed by the X11 core pointer on the default screen"""

    def __init__(self, display_name: Optional[str] = None) -> None:
        """
        Initialize X11 pointer seat

        Args:
            display_name: X11 display name (e.g., ':0'), None for default
        """
        self._display: Optional[Display] = None
        self._display_name: Optional[str] = display_name

    def connection_establish(self) -> None:
        """Establish connection to X11 display"""
        self._display = xdisplay.Display(self._display_name)
        logger.debug(f"Connected to X11 display {self._display_name or '(default)'}")

    def connection_close(self) -> None:
        """Close X11 display connection"""
        if self._display is not None:
            self._display.close()
            self._display = None

    def display_get(self) -> Display:
        """
        Get X11 display object

        Returns:
            X11 Display object

        Raises:
            RuntimeError: If not connected to display
        """
        if self._display is None:
            raise RuntimeError("Not connected to X11 display")
        return self._display

    def __enter__(self) -> "X11PointerSeat":
        """Context manager entry"""
        self.connection_establish()
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Context manager exit"""
        self.connection_close()

    def pointerPosition_get(self) -> Point:
        """
        Query current pointer position from the root window

        Returns:
            Pointer position in root coordinates

        Raises:
            RuntimeError: If not connected to display
        """
        display = self.display_get()
        root = display.screen().root
        pointer_data = root.query_pointer()
        return Point(x=pointer_data.root_x, y=pointer_data.root_y)

    def pointer_warp(self, position: Point) -> None:
        """
        Warp pointer to absolute position

        X11 pointer coordinates are integral, so the position is floored
        to the pixel it lies in.

        Args:
            position: Target position

        Raises:
            RuntimeError: If not connected to display
        """
        display = self.display_get()
        root = display.screen().root
        root.warp_pointer(math.floor(position.x), math.floor(position.y))
        display.sync()
