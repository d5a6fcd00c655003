# food_dataset/paths.py

from pathlib import Path
from typing import Optional


def interval_dir_name(interval: str) -> str:
    return f"{interval.strip()}Interval"


def sub_interval_dir_name(sub_interval: str) -> str:
    # only the first '.' is replaced: "1.3" -> "1_3Pounds"
    return sub_interval.strip().replace(".", "_", 1) + "Pounds"


def light_dir_name(light: str) -> str:
    light = light.strip()
    return f"{light[:1].upper()}{light[1:].lower()}Light"


def build_target_dir(
    root: Path,
    interval: str,
    sub_interval: str,
    light: Optional[str] = None,
) -> Path:
    """
    Deterministic bucket for a clip, e.g.:
      Pile of food dataset/1-2Interval/1_3Pounds/MediumLight
    Same inputs always give the same path, so re-runs land in the same bucket.
    """
    target = Path(root) / interval_dir_name(interval) / sub_interval_dir_name(sub_interval)
    if light is not None:
        target = target / light_dir_name(light)
    return target


def ensure_target_dir(
    root: Path,
    interval: str,
    sub_interval: str,
    light: Optional[str] = None,
) -> Path:
    """Build the target path and create the whole chain if needed (no-op if present)."""
    target = build_target_dir(root, interval, sub_interval, light)
    target.mkdir(parents=True, exist_ok=True)
    return target


def manifest_relpath(root: Path, image_path: Path) -> str:
    """Path of an image relative to the dataset root, always with '/' separators."""
    return Path(image_path).relative_to(Path(root)).as_posix()
