#!/usr/bin/env python3
"""Classify a local photo through a running Cattle Vision server.

Usage:
    python scripts/classify_image.py cow.jpg
    python scripts/classify_image.py cow.jpg --server http://127.0.0.1:5000 --top-k 3
    python scripts/classify_image.py cow.jpg --camera   # treat as a camera capture
"""

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from cattle_vision.client import HttpTransport, ImageFile, UploadController  # noqa: E402
from cattle_vision.domain.enums import UploadStatus  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Classify a cattle photo")
    parser.add_argument("path", type=Path, help="Image file to classify")
    parser.add_argument("--server", default="http://localhost:8000", help="Proxy base URL")
    parser.add_argument("--top-k", type=int, default=5, help="Number of predictions")
    parser.add_argument("--camera", action="store_true", help="Submit as a camera capture")
    args = parser.parse_args()

    controller = UploadController(HttpTransport(args.server), top_k=args.top_k)
    files = [ImageFile(args.path)]
    if args.camera:
        controller.on_camera_capture(files)
    else:
        controller.on_file_selected(files)

    view = controller.render()
    print("=" * 60)
    print(f"Status: {view.status.value}")
    print("=" * 60)

    if view.status != UploadStatus.SUCCESS:
        print(view.error)
        return 1

    print(f"Top prediction: {view.top_label}\n")
    for row in view.rows:
        bar = "#" * max(1, row.bar_value // 2)
        print(f"  {row.label:<30} {row.percent:>3}%  {bar}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
