from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from .analyzer import GestureAnalyzer
from .config import PipelineConfig
from .errors import MalformedGeometryError
from .geometry import RegionGeometry, extract_region, find_contours
from .region import RegionSelector
from .types import NO_GESTURE, FrameResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameContext:
    """
    Per-frame bookkeeping owned by the caller.

    The pipeline never keeps one between calls; advance with :meth:`next`.
    """

    index: int = 0
    started_at: float = field(default_factory=time.perf_counter)

    def next(self) -> "FrameContext":
        return FrameContext(index=self.index + 1)

    def elapsed_s(self, now: Optional[float] = None) -> float:
        if now is None:
            now = time.perf_counter()
        return max(0.0, now - self.started_at)

    def fps(self, now: Optional[float] = None) -> float:
        elapsed = self.elapsed_s(now)
        return 1.0 / elapsed if elapsed > 0 else 0.0


@dataclass(frozen=True)
class FrameOutput:
    """Result of one frame plus the geometry it was computed from (None if no region)."""

    context: FrameContext
    result: FrameResult
    region: Optional[RegionGeometry] = None


class GesturePipeline:
    """
    Selection -> geometry extraction -> finger counting -> classification, one frame at a time.

    A frame without a usable region yields ``NO_GESTURE``; nothing here raises per frame.
    """

    def __init__(self, config: Optional[PipelineConfig] = None) -> None:
        self._config = config or PipelineConfig()
        self._selector = RegionSelector(self._config.selector)
        self._analyzer = GestureAnalyzer(self._config.analyzer)

    def process_contours(self, contours: Sequence, context: Optional[FrameContext] = None) -> FrameOutput:
        context = context or FrameContext()
        try:
            index = self._selector.select_index(contours)
            if index < 0:
                return FrameOutput(context=context, result=NO_GESTURE)
            region = extract_region(contours[index], self._config.geometry)
            result = self._analyzer.analyze(region)
        except MalformedGeometryError as e:
            logger.debug("Frame %d: dropping malformed region: %s", context.index, e)
            return FrameOutput(context=context, result=NO_GESTURE)

        logger.debug(
            "Frame %d: fingers=%d gesture=%r area=%.0f defects=%d",
            context.index,
            result.fingers,
            result.gesture,
            result.area,
            result.defect_count,
        )
        return FrameOutput(context=context, result=result, region=region)

    def process_mask(self, mask: np.ndarray, context: Optional[FrameContext] = None) -> FrameOutput:
        """Run the pipeline on a binary (0/255) single-channel mask."""
        contours = find_contours(mask, self._config.geometry)
        return self.process_contours(contours, context)
