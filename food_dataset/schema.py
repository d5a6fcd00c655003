# food_dataset/schema.py

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Literal, Optional, Tuple


LightLevel = Literal["low", "medium", "high"]

LIGHT_LEVELS: Tuple[str, ...] = ("low", "medium", "high")


class ManifestPolicy(Enum):
    """How the manifest writer decides which frames are new."""

    # every .jpg in the target dir, duplicates rows on re-runs
    FULL_RESCAN = "full-rescan"
    # only frames numbered above the pre-extraction maximum
    INCREMENTAL = "incremental"


@dataclass(frozen=True)
class DatasetSchema:
    """
    Ordered manifest columns for one dataset.
    A dataset either records lighting for every row or for none of them.
    """
    fields: Tuple[str, ...]

    @property
    def has_light(self) -> bool:
        return "light" in self.fields

    def header_line(self) -> str:
        return ",".join(self.fields)


WITH_LIGHT = DatasetSchema(fields=("image_path", "interval", "subinterval", "light"))
WITHOUT_LIGHT = DatasetSchema(fields=("image_path", "interval", "subinterval"))


@dataclass(frozen=True)
class IngestionRequest:
    """
    One validated run: a source video and the three categories it is filed under.
    interval is "X-Y" (e.g. "1-2"), sub_interval a plain decimal (e.g. "1.3").
    """
    video_path: Path
    interval: str
    sub_interval: str
    light: Optional[LightLevel] = None


@dataclass
class ExtractionResult:
    frames_written: int
    first_index: int
    last_index: int
    paths: List[Path] = field(default_factory=list)


@dataclass
class IngestionResult:
    target_dir: Path
    start_index: int
    extraction: ExtractionResult
    rows_appended: int
