from .analyzer import GestureAnalyzer
from .config import PipelineConfig, load_config
from .pipeline import FrameContext, GesturePipeline
from .region import RegionSelector
from .types import ConvexityDefect, FingerData, FrameResult

__all__ = [
    "GestureAnalyzer",
    "GesturePipeline",
    "FrameContext",
    "RegionSelector",
    "PipelineConfig",
    "load_config",
    "ConvexityDefect",
    "FingerData",
    "FrameResult",
]
