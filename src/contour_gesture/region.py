from __future__ import annotations

import logging
from typing import Optional, Sequence

import numpy as np

from .config import SelectorConfig
from .errors import MalformedGeometryError
from .utils import as_points, polygon_area

logger = logging.getLogger(__name__)


class RegionSelector:
    """
    Picks the hand candidate out of all contours found in a mask.

    The largest region wins, but only if its area strictly exceeds ``min_area``.
    Exact ties keep the first contour seen.
    """

    def __init__(self, config: Optional[SelectorConfig] = None) -> None:
        self._config = config or SelectorConfig()

    def select_index(self, contours: Sequence) -> int:
        """Position of the selected contour in ``contours``, or -1 if none qualifies."""
        index = -1
        max_area = self._config.min_area  # the floor seeds the running maximum
        for i, contour in enumerate(contours):
            try:
                pts = as_points(contour)
            except MalformedGeometryError as e:
                logger.debug("Skipping contour %d: %s", i, e)
                continue
            if len(pts) < 3:
                continue
            area = polygon_area(pts)
            if area > max_area:
                max_area = area
                index = i

        if index < 0:
            logger.debug("No region above %.0f among %d contours", self._config.min_area, len(contours))
        return index

    def select(self, contours: Sequence) -> Optional[np.ndarray]:
        """Return the selected contour as an ``(N, 2)`` float array, or None."""
        index = self.select_index(contours)
        if index < 0:
            return None
        return as_points(contours[index])
