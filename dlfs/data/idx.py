"""
Parsing of gzip-compressed IDX files (the MNIST distribution format).

An IDX file is a big-endian header followed by densely packed unsigned
bytes. Image files carry a 16 byte header (magic, count, rows, cols) and
label files an 8 byte header (magic, count).
"""

import gzip
import struct
import zlib

import numpy as np

from ..errors import DecompressionError, FormatError


IMAGE_MAGIC = 2051
LABEL_MAGIC = 2049
IMAGE_HEADER_SIZE = 16
LABEL_HEADER_SIZE = 8
IMAGE_ROWS = 28
IMAGE_COLS = 28
IMAGE_SIZE = IMAGE_ROWS * IMAGE_COLS
NUM_CLASSES = 10


def decompress(raw: bytes, name: str = "<payload>") -> bytes:
    """
    Decompress a whole gzip stream in memory.

    Args:
        raw: Compressed bytes
        name: Resource name used in error messages

    Returns:
        Decompressed bytes
    """
    try:
        return gzip.decompress(raw)
    except (OSError, EOFError, zlib.error) as e:
        raise DecompressionError(f"{name}: corrupt or truncated gzip stream ({e})") from e


def _record_count(payload: bytes, header_size: int, record_size: int, name: str) -> int:
    if len(payload) < header_size:
        raise FormatError(
            f"{name}: payload of {len(payload)} bytes is shorter than the "
            f"{header_size} byte header"
        )
    body = len(payload) - header_size
    if body % record_size:
        raise FormatError(
            f"{name}: body of {body} bytes is not a whole number of "
            f"{record_size} byte records"
        )
    return body // record_size


def parse_images(payload: bytes, dtype=np.float32, name: str = "<images>") -> np.ndarray:
    """
    Parse a decompressed IDX image file.

    Args:
        payload: Decompressed file contents
        dtype: Floating dtype of the result
        name: Resource name used in error messages

    Returns:
        Pixel intensities in [0, 255]. Shape: (N, 784)
    """
    n = _record_count(payload, IMAGE_HEADER_SIZE, IMAGE_SIZE, name)
    magic, declared, rows, cols = struct.unpack_from(">IIII", payload)
    if magic != IMAGE_MAGIC:
        raise FormatError(f"{name}: bad magic number {magic}, expected {IMAGE_MAGIC}")
    if (rows, cols) != (IMAGE_ROWS, IMAGE_COLS):
        raise FormatError(f"{name}: images are {rows}x{cols}, expected {IMAGE_ROWS}x{IMAGE_COLS}")
    if declared != n:
        raise FormatError(f"{name}: header declares {declared} images but payload holds {n}")

    pixels = np.frombuffer(payload, dtype=np.uint8, offset=IMAGE_HEADER_SIZE)
    return pixels.reshape(n, IMAGE_SIZE).astype(dtype)


def one_hot(labels: np.ndarray, num_classes: int = NUM_CLASSES, dtype=np.float32) -> np.ndarray:
    """
    Expand integer class labels into one-hot rows.

    Args:
        labels: Class indices in [0, num_classes). Shape: (N,)
        num_classes: Width of each one-hot row
        dtype: Dtype of the result

    Returns:
        One-hot matrix. Shape: (N, num_classes)
    """
    labels = np.asarray(labels)
    if labels.size and (labels.min() < 0 or labels.max() >= num_classes):
        raise FormatError(f"labels must lie in [0, {num_classes}), got range "
                          f"[{labels.min()}, {labels.max()}]")
    encoded = np.zeros((labels.shape[0], num_classes), dtype=dtype)
    encoded[np.arange(labels.shape[0]), labels] = 1
    return encoded


def parse_labels(payload: bytes, dtype=np.float32, name: str = "<labels>") -> np.ndarray:
    """
    Parse a decompressed IDX label file into one-hot rows.

    Args:
        payload: Decompressed file contents
        dtype: Floating dtype of the result
        name: Resource name used in error messages

    Returns:
        One-hot labels. Shape: (N, 10)
    """
    n = _record_count(payload, LABEL_HEADER_SIZE, 1, name)
    magic, declared = struct.unpack_from(">II", payload)
    if magic != LABEL_MAGIC:
        raise FormatError(f"{name}: bad magic number {magic}, expected {LABEL_MAGIC}")
    if declared != n:
        raise FormatError(f"{name}: header declares {declared} labels but payload holds {n}")

    labels = np.frombuffer(payload, dtype=np.uint8, offset=LABEL_HEADER_SIZE)
    try:
        return one_hot(labels, NUM_CLASSES, dtype)
    except FormatError as e:
        raise FormatError(f"{name}: {e}") from e
