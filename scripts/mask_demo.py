from __future__ import annotations

import argparse
import logging
import os
import sys

import cv2

# Allow running without installing the package (repo-local usage).
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC_ROOT = os.path.join(REPO_ROOT, "src")
if SRC_ROOT not in sys.path:
    sys.path.insert(0, SRC_ROOT)

from contour_gesture.config import load_config  # noqa: E402
from contour_gesture.drawing import annotate  # noqa: E402
from contour_gesture.pipeline import FrameContext, GesturePipeline  # noqa: E402
from contour_gesture.telemetry import TelemetryRow  # noqa: E402


def main() -> int:
    ap = argparse.ArgumentParser(description="Count fingers and classify the gesture in a binary hand mask.")
    ap.add_argument("--mask", required=True, help="Path to a binary mask image (white hand on black)")
    ap.add_argument("--out", help="Path to output image (annotated)")
    ap.add_argument("--config", help="YAML file with threshold overrides")
    ap.add_argument("--frame", type=int, default=0, help="Frame index reported in the telemetry row")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    mask = cv2.imread(args.mask, cv2.IMREAD_GRAYSCALE)
    if mask is None:
        raise RuntimeError(f"Could not read mask: {args.mask}")
    _, mask = cv2.threshold(mask, 127, 255, cv2.THRESH_BINARY)

    pipeline = GesturePipeline(load_config(args.config))
    out = pipeline.process_mask(mask, FrameContext(index=args.frame))
    result = out.result

    if result.found:
        print(f"fingers: {result.fingers} gesture: {result.gesture}")
        print(
            f"centroid=({result.centroid[0]:.1f}, {result.centroid[1]:.1f}) area={result.area:.0f} "
            f"defects={result.defect_count} avg_angle={result.finger_data.avg_angle:.1f}"
        )
    else:
        print("no hand found")
    print(TelemetryRow.from_result(result, out.context).as_dict())

    if args.out:
        frame = cv2.cvtColor(mask, cv2.COLOR_GRAY2BGR)
        annotate(frame, result, out.region)
        ok = cv2.imwrite(args.out, frame)
        if not ok:
            raise RuntimeError(f"Could not write output image: {args.out}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
