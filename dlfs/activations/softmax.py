"""
Row-wise softmax.

Every row of the input is treated as an independent vector of scores and
mapped to a probability distribution over its columns. The scores are
shifted by the row maximum before exponentiation so large magnitudes do not
overflow; the shift cancels out in the normalization.
"""

import numpy as np


def softmax(x: np.ndarray) -> np.ndarray:
    """
    Compute the numerically stable softmax of each row.

    Args:
        x: Scores. Shape: (K,) for a single row or (B, K) for B rows.

    Returns:
        Probabilities of the same shape as ``x``; every row sums to 1.
    """
    x = np.asarray(x)
    single_row = x.ndim == 1
    if single_row:
        x = x[np.newaxis, :]  # (1, K)

    row_max = np.max(x, axis=-1, keepdims=True)  # (B, 1)
    e = np.exp(x - row_max)  # (B, K)
    result = e / np.sum(e, axis=-1, keepdims=True)

    if single_row:
        result = result.squeeze(0)

    return result


def softmax_mut(x: np.ndarray) -> None:
    """Overwrite ``x`` with its row-wise softmax."""
    x[...] = softmax(x)
