"""
Visual Regression Helpers

Screenshot baselines compared pixel by pixel with Pillow and numpy.

A missing baseline is recorded on first use and the comparison passes;
later runs compare against it. Differences above the allowance save the
actual image and a diff mask next to the other test artifacts.
"""
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import numpy as np
from PIL import Image

from ..exceptions import VisualMismatchError

logger = logging.getLogger(__name__)

# Per-channel tolerance as a fraction of 255 before a pixel counts as changed
DEFAULT_PIXEL_THRESHOLD = 0.2
DIFF_COLOR = (255, 0, 255)


@dataclass
class ImageDiff:
    diff_pixels: int
    total_pixels: int
    size_mismatch: bool = False
    mask: Optional[np.ndarray] = None

    @property
    def ratio(self) -> float:
        if not self.total_pixels:
            return 0.0
        return self.diff_pixels / self.total_pixels


def _load(data: Union[bytes, Image.Image]) -> Image.Image:
    if isinstance(data, Image.Image):
        return data.convert("RGB")
    return Image.open(io.BytesIO(data)).convert("RGB")


def compare_images(
    expected: Union[bytes, Image.Image],
    actual: Union[bytes, Image.Image],
    pixel_threshold: float = DEFAULT_PIXEL_THRESHOLD,
) -> ImageDiff:
    """
    Count the pixels that differ between two images.

    Images of different sizes never match: every pixel of the larger
    canvas is counted as changed.
    """
    if not 0.0 <= pixel_threshold <= 1.0:
        raise ValueError("pixel_threshold must be between 0.0 and 1.0")

    expected_img = _load(expected)
    actual_img = _load(actual)

    if expected_img.size != actual_img.size:
        width = max(expected_img.width, actual_img.width)
        height = max(expected_img.height, actual_img.height)
        logger.warning(
            f"Image size mismatch: expected={expected_img.size}, actual={actual_img.size}"
        )
        return ImageDiff(diff_pixels=width * height, total_pixels=width * height, size_mismatch=True)

    expected_array = np.asarray(expected_img, dtype=np.int16)
    actual_array = np.asarray(actual_img, dtype=np.int16)

    tolerance = pixel_threshold * 255
    mask = np.abs(expected_array - actual_array).max(axis=2) > tolerance
    total = expected_array.shape[0] * expected_array.shape[1]

    return ImageDiff(diff_pixels=int(mask.sum()), total_pixels=total, mask=mask)


def allowed_diff_pixels(
    total_pixels: int, max_diff_pixels: Optional[int] = None, max_diff_pixel_ratio: Optional[float] = None
) -> float:
    """Tighter of the two allowances; zero when neither is given."""
    limits = []
    if max_diff_pixels is not None:
        limits.append(max_diff_pixels)
    if max_diff_pixel_ratio is not None:
        limits.append(total_pixels * max_diff_pixel_ratio)
    return min(limits) if limits else 0


class SnapshotStore:
    """Baseline screenshots on disk, keyed by file name."""

    def __init__(
        self,
        snapshot_dir: Union[str, Path],
        output_dir: Union[str, Path],
        update: bool = False,
        max_diff_pixels: Optional[int] = None,
        pixel_threshold: float = DEFAULT_PIXEL_THRESHOLD,
    ):
        self.snapshot_dir = Path(snapshot_dir)
        self.output_dir = Path(output_dir)
        self.update = update
        self.max_diff_pixels = max_diff_pixels
        self.pixel_threshold = pixel_threshold

    def baseline_path(self, name: str) -> Path:
        return self.snapshot_dir / name

    def assert_match(
        self,
        screenshot: bytes,
        name: str,
        max_diff_pixel_ratio: Optional[float] = None,
        max_diff_pixels: Optional[int] = None,
    ) -> ImageDiff:
        """
        Compare a screenshot with the baseline called name.

        Raises:
            VisualMismatchError: If more pixels differ than allowed
        """
        baseline = self.baseline_path(name)

        if self.update or not baseline.exists():
            self._write(baseline, screenshot)
            logger.info(f"{'Updated' if self.update else 'Recorded'} baseline: {baseline}")
            size = _load(screenshot).size
            return ImageDiff(diff_pixels=0, total_pixels=size[0] * size[1])

        result = compare_images(baseline.read_bytes(), screenshot, self.pixel_threshold)
        if max_diff_pixels is None:
            max_diff_pixels = self.max_diff_pixels
        allowed = allowed_diff_pixels(result.total_pixels, max_diff_pixels, max_diff_pixel_ratio)

        logger.debug(
            f"Visual comparison {name}: {result.diff_pixels} differing pixels "
            f"({result.ratio:.2%}), allowed {allowed:.0f}"
        )

        if result.size_mismatch or result.diff_pixels > allowed:
            actual_path = self._save_failure_artifacts(name, baseline, screenshot, result)
            raise VisualMismatchError(
                name, result.ratio, result.diff_pixels, actual_path=str(actual_path)
            )
        return result

    def _save_failure_artifacts(
        self, name: str, baseline: Path, screenshot: bytes, result: ImageDiff
    ) -> Path:
        stem = Path(name).stem
        target = self.output_dir / "visual"
        actual_path = target / f"{stem}-actual.png"
        self._write(actual_path, screenshot)
        self._write(target / f"{stem}-expected.png", baseline.read_bytes())

        if result.mask is not None:
            diff_img = _load(screenshot).copy()
            pixels = np.asarray(diff_img).copy()
            pixels[result.mask] = DIFF_COLOR
            Image.fromarray(pixels).save(target / f"{stem}-diff.png")

        logger.warning(f"Visual mismatch for {name}, artifacts in {target}")
        return actual_path

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
