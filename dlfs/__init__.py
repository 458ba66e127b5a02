"""
dlfs
~~~~

Numeric building blocks for a small feed-forward network toolkit:
activation functions, loss functions and an MNIST loader.
"""

from .errors import (
    DatasetError,
    RetrievalError,
    FilesystemError,
    DecompressionError,
    FormatError,
    ShapeMismatchError,
)

__version__ = "0.1.0"
