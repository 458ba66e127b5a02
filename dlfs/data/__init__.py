from .idx import decompress, one_hot, parse_images, parse_labels
from .mnist_loader import Dataset, MNISTLoader, ensure_cached

__all__ = [
    "Dataset",
    "MNISTLoader",
    "ensure_cached",
    "decompress",
    "one_hot",
    "parse_images",
    "parse_labels",
]
