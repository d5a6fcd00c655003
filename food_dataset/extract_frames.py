# food_dataset/extract_frames.py

import argparse
import sys
from pathlib import Path
from typing import Callable, Optional

import cv2
from tqdm import tqdm

from .config import DEFAULT_FPS, FRAME_EXT, frame_prefix
from .resume import next_start_index
from .schema import ExtractionResult


# (frames written so far, index of the latest frame file)
ProgressCallback = Callable[[int, int], None]


class ExtractionError(RuntimeError):
    """The video could not be decoded or a frame could not be written."""


def frame_filename(prefix: str, index: int) -> str:
    return f"{prefix}_{index:04d}{FRAME_EXT}"


def extract_frames_to_dir(
    video_path: Path,
    target_dir: Path,
    prefix: str,
    start_index: int = 1,
    fps: float = DEFAULT_FPS,
    on_progress: Optional[ProgressCallback] = None,
    show_progress: bool = True,
) -> ExtractionResult:
    """
    Sample `fps` frames per second of video into target_dir as
    {prefix}_{index:04d}.jpg, numbering from start_index.

    Files below start_index are never touched; the caller is expected to pass
    the next unused index (see resume.next_start_index).
    """
    video_path = Path(video_path)
    target_dir = Path(target_dir)

    if fps <= 0:
        raise ExtractionError(f"Target fps must be positive, got {fps}")
    if start_index < 1:
        raise ExtractionError(f"start_index must be >= 1, got {start_index}")
    if not video_path.is_file():
        raise ExtractionError(f"Video not found: {video_path}")

    cap = cv2.VideoCapture(str(video_path))
    if not cap.isOpened():
        cap.release()
        raise ExtractionError(f"Could not open video: {video_path}")

    try:
        video_fps = cap.get(cv2.CAP_PROP_FPS)
        if video_fps <= 0:
            raise ExtractionError(f"Invalid FPS ({video_fps}) for video: {video_path}")

        frame_interval = max(int(round(video_fps / fps)), 1)

        # some containers don't report a frame count; tqdm then just counts up
        total_frames = int(cap.get(cv2.CAP_PROP_FRAME_COUNT))
        total = total_frames if total_frames > 0 else None

        frame_idx = 0
        saved = 0
        paths = []
        next_index = start_index

        with tqdm(
            total=total,
            desc=video_path.stem,
            unit="frame",
            disable=not show_progress,
        ) as pbar:
            while True:
                ret, frame = cap.read()
                if not ret:
                    break

                if frame_idx % frame_interval == 0:
                    out_path = target_dir / frame_filename(prefix, next_index)
                    if not cv2.imwrite(str(out_path), frame):
                        raise ExtractionError(f"Could not write frame: {out_path}")
                    paths.append(out_path)
                    saved += 1
                    if on_progress is not None:
                        on_progress(saved, next_index)
                    next_index += 1

                frame_idx += 1
                pbar.update(1)
    finally:
        cap.release()

    if frame_idx == 0:
        raise ExtractionError(f"No frames could be decoded from video: {video_path}")

    return ExtractionResult(
        frames_written=saved,
        first_index=start_index,
        last_index=start_index + saved - 1,
        paths=paths,
    )


def main():
    parser = argparse.ArgumentParser(description="Extract frames from a single video, resuming numbering.")
    parser.add_argument(
        "--video",
        type=str,
        required=True,
        help="Path to the input video.",
    )
    parser.add_argument(
        "--output_dir",
        type=str,
        required=True,
        help="Directory where extracted frames will be stored.",
    )
    parser.add_argument(
        "--fps",
        type=float,
        default=DEFAULT_FPS,
        help="Target frames per second to sample from the video.",
    )
    parser.add_argument(
        "--tag",
        type=str,
        default="",
        help="Optional tag appended to the 'frame' prefix, e.g. 'Joe' -> frameJoe_0001.jpg.",
    )

    args = parser.parse_args()

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    prefix = frame_prefix(args.tag)
    start = next_start_index(output_dir, prefix)
    print(f"[INFO] Extracting frames from {args.video} at ~{args.fps} fps into {output_dir}, starting at {start}")

    try:
        result = extract_frames_to_dir(Path(args.video), output_dir, prefix, start, args.fps)
    except ExtractionError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        sys.exit(1)

    print(f"[INFO] Saved {result.frames_written} frames ({result.first_index}-{result.last_index}).")


if __name__ == "__main__":
    main()
