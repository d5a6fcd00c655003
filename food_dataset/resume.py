# food_dataset/resume.py

import re
from pathlib import Path
from typing import Dict, List, Tuple

from .config import FRAME_EXT


_PATTERN_CACHE: Dict[str, re.Pattern] = {}


def frame_pattern(prefix: str) -> re.Pattern:
    """Matches '<prefix>_<digits>.jpg' with any zero-padding width."""
    if prefix not in _PATTERN_CACHE:
        _PATTERN_CACHE[prefix] = re.compile(
            rf"^{re.escape(prefix)}_(\d+){re.escape(FRAME_EXT)}$"
        )
    return _PATTERN_CACHE[prefix]


def list_numbered_frames(dir_path: Path, prefix: str) -> List[Tuple[int, Path]]:
    """
    (index, path) for every file in dir_path named like the frame pattern,
    sorted by index. Anything else in the directory is ignored.
    """
    dir_path = Path(dir_path)
    if not dir_path.is_dir():
        return []

    rx = frame_pattern(prefix)
    frames: List[Tuple[int, Path]] = []
    for p in dir_path.iterdir():
        m = rx.match(p.name)
        if m and p.is_file():
            frames.append((int(m.group(1)), p))
    return sorted(frames)


def existing_frame_indices(dir_path: Path, prefix: str) -> List[int]:
    return [idx for idx, _ in list_numbered_frames(dir_path, prefix)]


def max_frame_index(dir_path: Path, prefix: str) -> int:
    indices = existing_frame_indices(dir_path, prefix)
    return max(indices) if indices else 0


def next_start_index(dir_path: Path, prefix: str) -> int:
    """First unused frame number: 1 for an empty directory, otherwise max + 1."""
    return max_frame_index(dir_path, prefix) + 1
