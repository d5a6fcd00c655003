# food_dataset/pipeline.py

from typing import Optional

from .config import PipelineConfig
from .extract_frames import ProgressCallback, extract_frames_to_dir
from .manifest import check_request_schema, ensure_manifest, update_manifest
from .paths import ensure_target_dir
from .resume import max_frame_index
from .schema import IngestionRequest, IngestionResult


def log(msg: str) -> None:
    print(msg, flush=True)


def run_ingestion(
    request: IngestionRequest,
    config: PipelineConfig,
    on_progress: Optional[ProgressCallback] = None,
) -> IngestionResult:
    """
    Manifest check -> path -> resume index -> frame extraction -> manifest, strictly in that order.

    The pre-extraction max index is captured once and used both as the
    extraction offset and as the incremental manifest cutoff. Not safe to run
    concurrently against the same target directory.
    """
    # reject schema mismatches before any frame hits the disk
    check_request_schema(request, config.schema)
    if ensure_manifest(config.manifest_path, config.schema):
        log(f"[✓] Created manifest: {config.manifest_path}")

    light = request.light if config.schema.has_light else None
    target_dir = ensure_target_dir(config.root, request.interval, request.sub_interval, light)
    log(f"[✓] Created directory: {target_dir}")

    previous_max = max_frame_index(target_dir, config.prefix)
    start_index = previous_max + 1
    if previous_max:
        log(f"[INFO] Found existing frames up to {previous_max}, resuming at {start_index}")

    log(f"[▶] Extracting frames at {config.fps} fps...")
    extraction = extract_frames_to_dir(
        request.video_path,
        target_dir,
        config.prefix,
        start_index=start_index,
        fps=config.fps,
        on_progress=on_progress,
        show_progress=config.show_progress,
    )
    log(f"[✓] Extraction complete! {extraction.frames_written} frames "
        f"({extraction.first_index}-{extraction.last_index})")

    rows = update_manifest(
        config.manifest_path,
        config.root,
        target_dir,
        request,
        config.schema,
        config.prefix,
        config.policy,
        previous_max=previous_max,
    )
    if rows:
        log(f"[✓] Appended {rows} entries to {config.manifest_path.name}")
    else:
        log(f"[INFO] No new entries added to {config.manifest_path.name}")

    return IngestionResult(
        target_dir=target_dir,
        start_index=start_index,
        extraction=extraction,
        rows_appended=rows,
    )
