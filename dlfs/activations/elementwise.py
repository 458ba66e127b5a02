"""
Elementwise activation functions.

Each activation comes in two forms: a value-returning one that leaves its
input untouched, and a ``*_mut`` one that overwrites the input array.
"""

import numpy as np
from scipy.special import expit
from typing import Callable


def apply_elementwise(x: np.ndarray, fn: Callable[[np.ndarray], np.ndarray]) -> np.ndarray:
    """
    Apply a scalar function to every element of a matrix.

    Args:
        x: Input matrix of any shape
        fn: Unary function, vectorized over NumPy arrays (e.g. a ufunc)

    Returns:
        New array of the same shape as ``x``
    """
    x = np.asarray(x)
    result = np.asarray(fn(x))
    if result.shape != x.shape:
        raise ValueError(
            f"Elementwise function changed shape from {x.shape} to {result.shape}"
        )
    return result


def _relu(x: np.ndarray) -> np.ndarray:
    # np.maximum keeps NaN, so non-finite input propagates unchanged
    return np.maximum(x, np.zeros((), dtype=x.dtype))


def sigmoid(x: np.ndarray) -> np.ndarray:
    """Logistic sigmoid 1 / (1 + exp(-x))."""
    return apply_elementwise(x, expit)


def relu(x: np.ndarray) -> np.ndarray:
    """Rectified linear unit max(x, 0)."""
    return apply_elementwise(x, _relu)


def tanh(x: np.ndarray) -> np.ndarray:
    """Hyperbolic tangent."""
    return apply_elementwise(x, np.tanh)


def sigmoid_mut(x: np.ndarray) -> None:
    x[...] = sigmoid(x)


def relu_mut(x: np.ndarray) -> None:
    x[...] = relu(x)


def tanh_mut(x: np.ndarray) -> None:
    x[...] = tanh(x)
