"""
MNIST data loading and preprocessing.

The four dataset files are downloaded once into a local cache directory and
parsed from there on every subsequent load.
"""

import http.client
import logging
import os
import urllib.request
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple, Union

import numpy as np
from tqdm import tqdm

from ..errors import FilesystemError, FormatError, RetrievalError
from ..utils.config import resolve_dtype
from .idx import IMAGE_SIZE, NUM_CLASSES, decompress, parse_images, parse_labels

logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "https://ossci-datasets.s3.amazonaws.com/mnist/"
DEFAULT_DATA_DIR = "./dataset"

TRAIN_IMAGES = "train-images-idx3-ubyte.gz"
TRAIN_LABELS = "train-labels-idx1-ubyte.gz"
TEST_IMAGES = "t10k-images-idx3-ubyte.gz"
TEST_LABELS = "t10k-labels-idx1-ubyte.gz"
RESOURCES = (TRAIN_IMAGES, TRAIN_LABELS, TEST_IMAGES, TEST_LABELS)

NOMINAL_TRAIN_SIZE = 60000
NOMINAL_TEST_SIZE = 10000

PIXEL_MAX = 255

_CHUNK_SIZE = 1 << 16


@dataclass(frozen=True, eq=False)
class Dataset:
    """
    Train and test splits of MNIST as dense matrices.

    Images are (N, 784) rows of pixel intensities; labels are (N, 10)
    one-hot rows. The bundle holds read-only views, so the arrays passed in
    stay writeable for their owner.
    """

    train_images: np.ndarray
    train_labels: np.ndarray
    test_images: np.ndarray
    test_labels: np.ndarray

    def __post_init__(self):
        for split in ("train", "test"):
            images = getattr(self, f"{split}_images")
            labels = getattr(self, f"{split}_labels")
            if images.ndim != 2 or images.shape[1] != IMAGE_SIZE:
                raise FormatError(f"{split} images must be (N, {IMAGE_SIZE}), got {images.shape}")
            if labels.ndim != 2 or labels.shape[1] != NUM_CLASSES:
                raise FormatError(f"{split} labels must be (N, {NUM_CLASSES}), got {labels.shape}")
            if images.shape[0] != labels.shape[0]:
                raise FormatError(
                    f"{split} split has {images.shape[0]} images but {labels.shape[0]} labels"
                )
        for name in ("train_images", "train_labels", "test_images", "test_labels"):
            view = getattr(self, name).view()
            view.flags.writeable = False
            object.__setattr__(self, name, view)

    def normalize(self) -> "Dataset":
        """
        Scale pixel intensities from [0, 255] to [0, 1].

        Returns:
            New Dataset; labels are shared with this one
        """
        return Dataset(
            train_images=self.train_images / PIXEL_MAX,
            train_labels=self.train_labels,
            test_images=self.test_images / PIXEL_MAX,
            test_labels=self.test_labels,
        )

    def batches(self, split: str = "train", batch_size: int = 100) -> Iterator[Tuple[np.ndarray, np.ndarray]]:
        """
        Iterate over consecutive (images, labels) row blocks of a split.

        Args:
            split: "train" or "test"
            batch_size: Rows per batch; the last batch may be shorter

        Yields:
            (images, labels) views of shape (B, 784) and (B, 10)
        """
        if split not in ("train", "test"):
            raise ValueError(f"Unknown split '{split}', expected 'train' or 'test'")
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")

        images = getattr(self, f"{split}_images")
        labels = getattr(self, f"{split}_labels")
        for start in range(0, images.shape[0], batch_size):
            yield images[start:start + batch_size], labels[start:start + batch_size]


def _content_length(response) -> Optional[int]:
    try:
        return int(response.headers.get("Content-Length"))
    except (TypeError, ValueError):
        return None


def _fetch(url: str, show_progress: bool = False, position: int = 0) -> bytes:
    with urllib.request.urlopen(url) as response:
        total = _content_length(response)
        chunks = []
        with tqdm(
            total=total,
            unit="B",
            unit_scale=True,
            desc=url.rsplit("/", 1)[-1],
            position=position,
            disable=not show_progress,
        ) as pbar:
            while True:
                chunk = response.read(_CHUNK_SIZE)
                if not chunk:
                    break
                chunks.append(chunk)
                pbar.update(len(chunk))
    return b"".join(chunks)


def ensure_cached(
    path: Union[str, Path], url: str, show_progress: bool = False, position: int = 0
) -> Path:
    """
    Make sure a remote resource is present at a local path.

    The body is written unmodified, first to a temporary file that is then
    renamed into place, so a failed download never leaves a partial file
    at ``path``.

    Args:
        path: Local cache path
        url: Remote location of the resource
        show_progress: Show a download progress bar
        position: Line of the progress bar when several downloads run at once

    Returns:
        Path to the cached file
    """
    path = Path(path)
    if path.exists():
        return path

    logger.info(f"Downloading {url}")
    try:
        body = _fetch(url, show_progress, position)
    except (OSError, http.client.HTTPException, ValueError) as e:
        logger.error(f"Failed to download {url}: {e}")
        raise RetrievalError(f"dataset unavailable: could not retrieve {url} ({e})") from e

    temp_path = path.with_name(path.name + ".tmp")
    try:
        temp_path.write_bytes(body)
        os.replace(temp_path, path)
    except OSError as e:
        if temp_path.is_file():
            temp_path.unlink()
        raise FilesystemError(f"could not write {path} ({e})") from e

    logger.info(f"Saved {path} ({len(body) / (1024**2):.2f} MB)")
    return path


class MNISTLoader:
    """Data loader for MNIST dataset."""

    def __init__(
        self,
        data_dir: Union[str, Path] = DEFAULT_DATA_DIR,
        base_url: str = DEFAULT_BASE_URL,
        dtype=np.float32,
        show_progress: bool = False,
    ):
        """
        Initialize MNIST loader.

        Args:
            data_dir: Directory to store/load data
            base_url: Remote directory holding the four dataset files
            dtype: Floating dtype of the loaded matrices
            show_progress: Show download progress bars
        """
        self.data_dir = Path(data_dir)
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.dtype = np.dtype(dtype)
        self.show_progress = show_progress

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "MNISTLoader":
        """
        Build a loader from the ``data`` section of a configuration.

        Args:
            config: Full configuration dictionary

        Returns:
            Configured loader
        """
        data = config.get("data", {})
        return cls(
            data_dir=data.get("data_dir", DEFAULT_DATA_DIR),
            base_url=data.get("base_url", DEFAULT_BASE_URL),
            dtype=resolve_dtype(data.get("dtype", "float32")),
            show_progress=data.get("show_progress", False),
        )

    def path(self, resource: str) -> Path:
        """Local cache path of a resource."""
        return self.data_dir / resource

    def url(self, resource: str) -> str:
        """Remote URL of a resource."""
        return self.base_url + resource

    def missing(self):
        """Resources not yet present in the cache directory."""
        return [r for r in RESOURCES if not self.path(r).exists()]

    def download(self, resources: Optional[list] = None) -> None:
        """
        Download resources concurrently and wait for all of them.

        Resources that finish downloading stay cached even if another one
        fails; the first failure is raised once every download has ended.

        Args:
            resources: Filenames to fetch (default: all missing ones)
        """
        if resources is None:
            resources = self.missing()
        if not resources:
            return

        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"could not create {self.data_dir} ({e})") from e

        with ThreadPoolExecutor(max_workers=len(resources)) as executor:
            futures = [
                executor.submit(ensure_cached, self.path(r), self.url(r), self.show_progress, i)
                for i, r in enumerate(resources)
            ]
            wait(futures)

        for future in futures:
            error = future.exception()
            if error is not None:
                raise error

    def _read(self, resource: str) -> bytes:
        path = self.path(resource)
        try:
            raw = path.read_bytes()
        except OSError as e:
            raise FilesystemError(f"could not read {path} ({e})") from e
        return decompress(raw, resource)

    def _check_size(self, split: str, n: int, nominal: int) -> None:
        if n != nominal:
            logger.warning(f"{split} split has {n} records, expected {nominal}")

    def load(self) -> Dataset:
        """
        Load MNIST dataset, downloading missing files first.

        Returns:
            Dataset with raw pixel intensities in [0, 255]
        """
        self.download()

        logger.info(f"Loading MNIST from {self.data_dir}")
        train_images = parse_images(self._read(TRAIN_IMAGES), self.dtype, TRAIN_IMAGES)
        train_labels = parse_labels(self._read(TRAIN_LABELS), self.dtype, TRAIN_LABELS)
        test_images = parse_images(self._read(TEST_IMAGES), self.dtype, TEST_IMAGES)
        test_labels = parse_labels(self._read(TEST_LABELS), self.dtype, TEST_LABELS)

        self._check_size("train", train_images.shape[0], NOMINAL_TRAIN_SIZE)
        self._check_size("test", test_images.shape[0], NOMINAL_TEST_SIZE)

        return Dataset(
            train_images=train_images,
            train_labels=train_labels,
            test_images=test_images,
            test_labels=test_labels,
        )

    @staticmethod
    def normalize(dataset: Dataset) -> Dataset:
        """
        Scale images to [0, 1] without touching the input dataset.

        Args:
            dataset: Dataset with raw pixel intensities

        Returns:
            New normalized Dataset
        """
        return dataset.normalize()
