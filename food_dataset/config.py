# food_dataset/config.py

from dataclasses import dataclass
from pathlib import Path

from .schema import DatasetSchema, ManifestPolicy, WITH_LIGHT, WITHOUT_LIGHT


DATASET_ROOT = Path("Pile of food dataset")
MANIFEST_FILENAME = "manifest.csv"

# Output frames per second sampled from each clip
DEFAULT_FPS = 2.0

FRAME_PREFIX = "frame"
FRAME_EXT = ".jpg"


def frame_prefix(tag: str = "") -> str:
    """'frame' plus an optional dataset tag, e.g. tag 'Joe' -> 'frameJoe'."""
    return f"{FRAME_PREFIX}{tag.strip()}"


@dataclass
class PipelineConfig:
    root: Path = DATASET_ROOT
    fps: float = DEFAULT_FPS
    tag: str = ""
    schema: DatasetSchema = WITH_LIGHT
    policy: ManifestPolicy = ManifestPolicy.INCREMENTAL
    show_progress: bool = True

    @property
    def prefix(self) -> str:
        return frame_prefix(self.tag)

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_FILENAME

    @classmethod
    def create(
        cls,
        root: Path = DATASET_ROOT,
        fps: float = DEFAULT_FPS,
        tag: str = "",
        with_light: bool = True,
        policy: ManifestPolicy = ManifestPolicy.INCREMENTAL,
        show_progress: bool = True,
    ) -> "PipelineConfig":
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        return cls(
            root=Path(root),
            fps=fps,
            tag=tag,
            schema=WITH_LIGHT if with_light else WITHOUT_LIGHT,
            policy=policy,
            show_progress=show_progress,
        )
