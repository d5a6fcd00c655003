from pathlib import Path

import cv2
import numpy as np
import pytest

from food_dataset.config import PipelineConfig
from food_dataset.schema import IngestionRequest


def write_video(path: Path, n_frames: int, fps: float = 10.0, size=(64, 48)) -> Path:
    w, h = size
    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), fps, (w, h))
    assert writer.isOpened(), "OpenCV could not open a MJPG writer"
    for i in range(n_frames):
        frame = np.full((h, w, 3), (i * 7) % 255, dtype=np.uint8)
        writer.write(frame)
    writer.release()
    return path


@pytest.fixture
def make_video(tmp_path):
    def _make(name: str = "clip.avi", n_frames: int = 20, fps: float = 10.0) -> Path:
        return write_video(tmp_path / name, n_frames, fps)
    return _make


@pytest.fixture
def dataset_root(tmp_path):
    return tmp_path / "Pile of food dataset"


@pytest.fixture
def config(dataset_root):
    return PipelineConfig.create(root=dataset_root, fps=2.0, show_progress=False)


@pytest.fixture
def request_for():
    def _req(video: Path, interval="1-2", sub="1.3", light="medium") -> IngestionRequest:
        return IngestionRequest(video_path=video, interval=interval, sub_interval=sub, light=light)
    return _req
