"""
Download (if needed), load and normalize MNIST, then walk the training batches.

Usage:
    python scripts/load_mnist.py --data-dir ./dataset --dtype float32 --batch-size 100
    python scripts/load_mnist.py --config configs/mnist.yaml
"""

import argparse
import logging
import sys

from dlfs.data.mnist_loader import MNISTLoader
from dlfs.errors import DatasetError
from dlfs.utils.config import load_config, get_default_config

logger = logging.getLogger("load_mnist")


def parse_args():
    parser = argparse.ArgumentParser(description="Load the MNIST dataset")
    parser.add_argument("--config", type=str, default=None, help="Path to config file")
    parser.add_argument("--data-dir", type=str, default=None, help="Dataset cache directory")
    parser.add_argument("--dtype", type=str, default=None, choices=["float32", "float64"],
                        help="Floating dtype of the matrices")
    parser.add_argument("--batch-size", type=int, default=None, help="Batch size")
    parser.add_argument("--verbose", action="store_true", help="Log debug messages")
    return parser.parse_args()


def main():
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # Load configuration
    config = load_config(args.config) if args.config else get_default_config()
    if args.data_dir:
        config["data"]["data_dir"] = args.data_dir
    if args.dtype:
        config["data"]["dtype"] = args.dtype
    if args.batch_size:
        config["training"]["batch_size"] = args.batch_size
    config["data"]["show_progress"] = True

    loader = MNISTLoader.from_config(config)
    try:
        mnist = loader.normalize(loader.load())
    except DatasetError as e:
        logger.error(f"Could not load MNIST: {e}")
        return 1

    logger.info(f"train images {mnist.train_images.shape}, labels {mnist.train_labels.shape}")
    logger.info(f"test images {mnist.test_images.shape}, labels {mnist.test_labels.shape}")

    batch_size = config["training"]["batch_size"]
    num_batches = 0
    for images, _ in mnist.batches("train", batch_size):
        num_batches += 1
        logger.debug(f"batch {num_batches}: {images.size} elements")
    print(f"{num_batches} batches of {batch_size * mnist.train_images.shape[1]} elements")
    return 0


if __name__ == "__main__":
    sys.exit(main())
