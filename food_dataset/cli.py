# food_dataset/cli.py
"""
Interactive driver for the food pile dataset.

Pipeline (one video per run):
  [0] collect_request     → video path, interval, sub-interval, lighting
      ensure_manifest     → header written or checked before anything else touches disk
  [1] ensure_target_dir   → Pile of food dataset/{interval}Interval/{sub}Pounds/{Light}Light/
  [2] next_start_index    → first unused frame number in that directory
  [3] extract_frames      → {prefix}_%04d.jpg, numbered from [2]
  [4] update_manifest     → Pile of food dataset/manifest.csv
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import DATASET_ROOT, DEFAULT_FPS, PipelineConfig
from .extract_frames import ExtractionError
from .manifest import ManifestSchemaError
from .pipeline import log, run_ingestion
from .prompts import collect_request
from .schema import LIGHT_LEVELS, ManifestPolicy


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Add one food pile video to the image dataset.")
    parser.add_argument(
        "--video",
        type=str,
        help="Path to the video file. Asked interactively if omitted.",
    )
    parser.add_argument(
        "--interval",
        type=str,
        help="Weight interval, e.g. 1-2. Asked interactively if omitted.",
    )
    parser.add_argument(
        "--sub-interval",
        type=str,
        help="Sub-interval weight, e.g. 1.3. Asked interactively if omitted.",
    )
    parser.add_argument(
        "--light",
        type=str,
        help=f"Lighting condition ({', '.join(LIGHT_LEVELS)}). Asked interactively if omitted.",
    )
    parser.add_argument(
        "--root",
        type=str,
        default=str(DATASET_ROOT),
        help="Dataset root directory.",
    )
    parser.add_argument(
        "--fps",
        type=float,
        default=DEFAULT_FPS,
        help="Frames per second to sample from the video.",
    )
    parser.add_argument(
        "--tag",
        type=str,
        default="",
        help="Tag appended to the frame prefix, e.g. 'Joe' -> frameJoe_0001.jpg.",
    )
    parser.add_argument(
        "--no-light",
        action="store_true",
        help="Dataset without a lighting column / LightLevel directories.",
    )
    parser.add_argument(
        "--policy",
        choices=[p.value for p in ManifestPolicy],
        default=ManifestPolicy.INCREMENTAL.value,
        help="Which frames get manifest rows: only this run's (incremental) or every .jpg in the folder (full-rescan).",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Hide the extraction progress bar.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    log("Welcome to the food pile dataset pipeline")

    try:
        config = PipelineConfig.create(
            root=Path(args.root),
            fps=args.fps,
            tag=args.tag,
            with_light=not args.no_light,
            policy=ManifestPolicy(args.policy),
            show_progress=not args.quiet,
        )

        # -------------------------------------------------------
        # [0] Collect the request
        # -------------------------------------------------------
        request = collect_request(
            with_light=not args.no_light,
            video=args.video,
            interval=args.interval,
            sub_interval=args.sub_interval,
            light=args.light,
        )

        # -------------------------------------------------------
        # [1]-[4] Directory, resume index, extraction, manifest
        # -------------------------------------------------------
        run_ingestion(request, config)
    except (EOFError, KeyboardInterrupt):
        print("\nAborted.", file=sys.stderr)
        sys.exit(1)
    except ExtractionError as e:
        print(f"[✖] Extraction error: {e}", file=sys.stderr)
        sys.exit(1)
    except ManifestSchemaError as e:
        print(f"[✖] Manifest error: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        sys.exit(1)

    log("All done!")


if __name__ == "__main__":
    main()
