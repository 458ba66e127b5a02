# Activation functions for feed-forward networks
#
# Elementwise:
#   - sigmoid, relu, tanh
# Row-wise:
#   - softmax (shifted by the row maximum for stability)
#
# Every function has an in-place ``*_mut`` variant.

from typing import Callable, Dict

import numpy as np

from .elementwise import (
    apply_elementwise,
    sigmoid,
    relu,
    tanh,
    sigmoid_mut,
    relu_mut,
    tanh_mut,
)
from .softmax import softmax, softmax_mut


ACTIVATIONS: Dict[str, Callable[[np.ndarray], np.ndarray]] = {
    "sigmoid": sigmoid,
    "relu": relu,
    "tanh": tanh,
    "softmax": softmax,
}


def get_activation(name: str) -> Callable[[np.ndarray], np.ndarray]:
    """
    Look up a value-returning activation function by name.

    Args:
        name: One of "sigmoid", "relu", "tanh", "softmax"

    Returns:
        The activation function
    """
    try:
        return ACTIVATIONS[name.lower()]
    except KeyError:
        available = ", ".join(ACTIVATIONS)
        raise ValueError(f"Unknown activation '{name}'. Available: {available}") from None


__all__ = [
    "apply_elementwise",
    # Elementwise
    "sigmoid",
    "relu",
    "tanh",
    "sigmoid_mut",
    "relu_mut",
    "tanh_mut",
    # Row-wise
    "softmax",
    "softmax_mut",
    # Registry
    "ACTIVATIONS",
    "get_activation",
]
