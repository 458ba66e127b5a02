"""
Exception types raised by dlfs.

Dataset loading failures share the DatasetError base so callers can retry
the whole load with a single except clause. Shape errors in the loss
functions are plain ValueErrors.
"""


class DatasetError(Exception):
    """Base class for failures while acquiring or parsing the dataset."""


class RetrievalError(DatasetError):
    """A remote resource could not be downloaded."""


class FilesystemError(DatasetError):
    """The cache directory or a cache file could not be created, written or read."""


class DecompressionError(DatasetError):
    """A cached file is not a valid gzip stream."""


class FormatError(DatasetError):
    """A decompressed payload does not match the expected record layout."""


class ShapeMismatchError(ValueError):
    """Prediction and label matrices do not have the same shape."""
