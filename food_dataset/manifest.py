# food_dataset/manifest.py

import csv
import io
from pathlib import Path
from typing import List, Sequence

from .config import FRAME_EXT
from .paths import manifest_relpath
from .resume import list_numbered_frames
from .schema import DatasetSchema, IngestionRequest, ManifestPolicy


class ManifestSchemaError(ValueError):
    """The manifest on disk was started with a different column layout."""


def read_header(manifest_path: Path) -> List[str]:
    with manifest_path.open("r", newline="") as f:
        reader = csv.reader(f)
        return next(reader, [])


def ensure_manifest(manifest_path: Path, schema: DatasetSchema) -> bool:
    """
    Create the manifest with its header row if it doesn't exist yet.
    Returns True if the file was created. An existing manifest must carry the
    same header, otherwise rows would not line up with columns.
    """
    manifest_path = Path(manifest_path)
    if manifest_path.exists() and manifest_path.stat().st_size > 0:
        header = read_header(manifest_path)
        if tuple(header) != schema.fields:
            raise ManifestSchemaError(
                f"{manifest_path} has columns {','.join(header)!r}, "
                f"expected {schema.header_line()!r}"
            )
        return False

    manifest_path.parent.mkdir(parents=True, exist_ok=True)
    with manifest_path.open("w", newline="") as f:
        f.write(schema.header_line() + "\n")
    return True


def check_request_schema(request: IngestionRequest, schema: DatasetSchema) -> None:
    if schema.has_light and request.light is None:
        raise ManifestSchemaError("Schema has a light column but no lighting condition was given")
    if not schema.has_light and request.light is not None:
        raise ManifestSchemaError(f"Schema has no light column but lighting {request.light!r} was given")


def list_jpgs(dir_path: Path) -> List[Path]:
    files = [p for p in Path(dir_path).iterdir() if p.is_file() and p.suffix.lower() == FRAME_EXT]
    return sorted(files)


def select_new_frames(
    target_dir: Path,
    prefix: str,
    policy: ManifestPolicy,
    previous_max: int = 0,
) -> List[Path]:
    """
    Frames that should get a manifest row for this run.

    FULL_RESCAN returns every .jpg in the directory, so frames from earlier
    runs are listed again. INCREMENTAL only returns numbered frames above
    previous_max, the highest index that existed before extraction.
    """
    if policy is ManifestPolicy.FULL_RESCAN:
        return list_jpgs(target_dir)
    return [p for idx, p in list_numbered_frames(target_dir, prefix) if idx > previous_max]


def build_rows(
    root: Path,
    image_paths: Sequence[Path],
    request: IngestionRequest,
    schema: DatasetSchema,
) -> List[List[str]]:
    interval = request.interval.strip()
    sub_interval = request.sub_interval.strip()

    rows: List[List[str]] = []
    for p in image_paths:
        row = [manifest_relpath(root, p), interval, sub_interval]
        if schema.has_light:
            if request.light is None:
                raise ManifestSchemaError("Schema has a light column but no lighting condition was given")
            row.append(request.light.lower())
        rows.append(row)
    return rows


def ends_with_newline(path: Path) -> bool:
    """True for a missing or empty file too, since nothing needs separating."""
    if not path.exists() or path.stat().st_size == 0:
        return True
    with path.open("rb") as f:
        f.seek(-1, 2)
        return f.read(1) in (b"\n", b"\r")


def append_rows(manifest_path: Path, rows: Sequence[Sequence[str]]) -> int:
    """Append all rows in a single write, newline separated with a trailing newline."""
    if not rows:
        return 0

    manifest_path = Path(manifest_path)
    buf = io.StringIO()
    # a hand-edited manifest may have lost its final newline
    if not ends_with_newline(manifest_path):
        buf.write("\n")
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerows(rows)

    with manifest_path.open("a", newline="") as f:
        f.write(buf.getvalue())
    return len(rows)


def update_manifest(
    manifest_path: Path,
    root: Path,
    target_dir: Path,
    request: IngestionRequest,
    schema: DatasetSchema,
    prefix: str,
    policy: ManifestPolicy,
    previous_max: int = 0,
) -> int:
    """Header if needed, then one row per new frame. Returns the number of rows appended."""
    ensure_manifest(manifest_path, schema)
    frames = select_new_frames(target_dir, prefix, policy, previous_max)
    rows = build_rows(root, frames, request, schema)
    return append_rows(manifest_path, rows)
