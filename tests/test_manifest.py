import csv
from pathlib import Path

import pytest

from food_dataset.manifest import (
    ManifestSchemaError,
    append_rows,
    build_rows,
    ensure_manifest,
    select_new_frames,
    update_manifest,
)
from food_dataset.paths import ensure_target_dir
from food_dataset.schema import WITH_LIGHT, WITHOUT_LIGHT, IngestionRequest, ManifestPolicy


def add_frames(dir_path: Path, indices, prefix="frame"):
    for i in indices:
        (dir_path / f"{prefix}_{i:04d}.jpg").write_bytes(b"\xff\xd8")


def read_rows(path: Path):
    with path.open(newline="") as f:
        return list(csv.reader(f))


@pytest.fixture
def request_medium():
    return IngestionRequest(video_path=Path("clip.mp4"), interval="1-2", sub_interval="1.3", light="medium")


@pytest.fixture
def target(dataset_root):
    return ensure_target_dir(dataset_root, "1-2", "1.3", "medium")


def test_header_written_once(dataset_root):
    manifest = dataset_root / "manifest.csv"
    assert ensure_manifest(manifest, WITH_LIGHT) is True
    assert ensure_manifest(manifest, WITH_LIGHT) is False
    assert manifest.read_text() == "image_path,interval,subinterval,light\n"


def test_existing_manifest_with_other_schema_is_rejected(dataset_root):
    manifest = dataset_root / "manifest.csv"
    ensure_manifest(manifest, WITH_LIGHT)
    with pytest.raises(ManifestSchemaError):
        ensure_manifest(manifest, WITHOUT_LIGHT)


def test_rows_with_light(dataset_root, target, request_medium):
    add_frames(target, [1, 2])
    frames = select_new_frames(target, "frame", ManifestPolicy.INCREMENTAL, previous_max=0)
    rows = build_rows(dataset_root, frames, request_medium, WITH_LIGHT)
    assert rows == [
        ["1-2Interval/1_3Pounds/MediumLight/frame_0001.jpg", "1-2", "1.3", "medium"],
        ["1-2Interval/1_3Pounds/MediumLight/frame_0002.jpg", "1-2", "1.3", "medium"],
    ]


def test_lightless_rows_match_header_width(dataset_root):
    target = ensure_target_dir(dataset_root, "1-2", "1.3")
    add_frames(target, [1, 2, 3])
    request = IngestionRequest(video_path=Path("clip.mp4"), interval="1-2", sub_interval="1.3")
    manifest = dataset_root / "manifest.csv"

    update_manifest(manifest, dataset_root, target, request, WITHOUT_LIGHT, "frame", ManifestPolicy.INCREMENTAL)

    rows = read_rows(manifest)
    assert rows[0] == ["image_path", "interval", "subinterval"]
    assert all(len(r) == len(rows[0]) for r in rows)
    assert len(rows) == 4


def test_append_is_single_batch_with_trailing_newline(dataset_root):
    manifest = dataset_root / "manifest.csv"
    ensure_manifest(manifest, WITHOUT_LIGHT)
    append_rows(manifest, [["a/frame_0001.jpg", "1-2", "1.3"], ["a/frame_0002.jpg", "1-2", "1.3"]])
    assert manifest.read_text() == (
        "image_path,interval,subinterval\n"
        "a/frame_0001.jpg,1-2,1.3\n"
        "a/frame_0002.jpg,1-2,1.3\n"
    )


def test_append_nothing_leaves_file_untouched(dataset_root):
    manifest = dataset_root / "manifest.csv"
    ensure_manifest(manifest, WITH_LIGHT)
    before = manifest.read_text()
    assert append_rows(manifest, []) == 0
    assert manifest.read_text() == before


def test_commas_in_paths_are_quoted(dataset_root):
    target = ensure_target_dir(dataset_root, "1-2", "1.3")
    (target / "pile, side.jpg").write_bytes(b"")
    request = IngestionRequest(video_path=Path("clip.mp4"), interval="1-2", sub_interval="1.3")
    manifest = dataset_root / "manifest.csv"
    update_manifest(manifest, dataset_root, target, request, WITHOUT_LIGHT, "frame", ManifestPolicy.FULL_RESCAN)
    assert '"1-2Interval/1_3Pounds/pile, side.jpg"' in manifest.read_text()
    assert read_rows(manifest)[1] == ["1-2Interval/1_3Pounds/pile, side.jpg", "1-2", "1.3"]


def test_incremental_skips_frames_from_earlier_runs(dataset_root, target, request_medium):
    manifest = dataset_root / "manifest.csv"
    add_frames(target, [1, 2, 3])
    assert update_manifest(
        manifest, dataset_root, target, request_medium, WITH_LIGHT, "frame", ManifestPolicy.INCREMENTAL, 0
    ) == 3

    add_frames(target, [4, 5])
    assert update_manifest(
        manifest, dataset_root, target, request_medium, WITH_LIGHT, "frame", ManifestPolicy.INCREMENTAL, 3
    ) == 2

    paths = [r[0] for r in read_rows(manifest)[1:]]
    assert len(paths) == len(set(paths)) == 5


def test_incremental_with_nothing_new_appends_nothing(dataset_root, target, request_medium):
    manifest = dataset_root / "manifest.csv"
    add_frames(target, [1, 2])
    n = update_manifest(
        manifest, dataset_root, target, request_medium, WITH_LIGHT, "frame", ManifestPolicy.INCREMENTAL, 2
    )
    assert n == 0
    assert len(read_rows(manifest)) == 1


def test_full_rescan_duplicates_rows_on_rerun(dataset_root, target, request_medium):
    # known defect of the rescan policy: earlier frames are listed again
    manifest = dataset_root / "manifest.csv"
    add_frames(target, [1, 2])
    update_manifest(manifest, dataset_root, target, request_medium, WITH_LIGHT, "frame", ManifestPolicy.FULL_RESCAN)
    add_frames(target, [3])
    update_manifest(manifest, dataset_root, target, request_medium, WITH_LIGHT, "frame", ManifestPolicy.FULL_RESCAN)

    paths = [r[0] for r in read_rows(manifest)[1:]]
    assert len(paths) == 2 + 3
    assert paths.count("1-2Interval/1_3Pounds/MediumLight/frame_0001.jpg") == 2


def test_full_rescan_picks_up_any_jpg(target):
    add_frames(target, [1])
    (target / "extra.JPG").write_bytes(b"")
    (target / "notes.txt").write_text("x")
    names = [p.name for p in select_new_frames(target, "frame", ManifestPolicy.FULL_RESCAN)]
    assert names == ["extra.JPG", "frame_0001.jpg"]


def test_append_after_hand_edit_without_trailing_newline(dataset_root):
    manifest = dataset_root / "manifest.csv"
    dataset_root.mkdir(parents=True)
    manifest.write_text("image_path,interval,subinterval\na/frame_0001.jpg,1-2,1.3")

    append_rows(manifest, [["a/frame_0002.jpg", "1-2", "1.3"]])

    assert read_rows(manifest) == [
        ["image_path", "interval", "subinterval"],
        ["a/frame_0001.jpg", "1-2", "1.3"],
        ["a/frame_0002.jpg", "1-2", "1.3"],
    ]
    assert manifest.read_text().endswith("\n")
