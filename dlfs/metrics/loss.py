"""
Loss functions comparing a prediction matrix with a label matrix.
"""

import numpy as np
from typing import Tuple

from ..errors import ShapeMismatchError


# Stand-in for -ln(eps) when the predicted probability of a true class is
# exactly zero. Kept as a literal; reference values depend on it.
ZERO_PROBABILITY_PENALTY = 20


def _as_matching_pair(prediction: np.ndarray, label: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    prediction = np.asarray(prediction)
    label = np.asarray(label)
    if prediction.shape != label.shape:
        raise ShapeMismatchError(
            f"prediction shape {prediction.shape} does not match label shape {label.shape}"
        )
    if prediction.ndim == 1:
        prediction = prediction[np.newaxis, :]
        label = label[np.newaxis, :]
    return prediction, label


def sum_squared_error(prediction: np.ndarray, label: np.ndarray):
    """
    Half the sum of squared differences over every entry.

    Args:
        prediction: Predicted values. Shape: (N, C) or (C,)
        label: Target values, same shape as ``prediction``

    Returns:
        Scalar loss
    """
    prediction, label = _as_matching_pair(prediction, label)
    diff = prediction - label
    return np.sum(diff * diff) / 2


def cross_entropy_error(prediction: np.ndarray, label: np.ndarray):
    """
    Cross-entropy averaged over rows.

    Only entries with a nonzero label contribute, each adding -ln(p). A zero
    probability at such an entry adds ZERO_PROBABILITY_PENALTY instead of
    infinity.

    Args:
        prediction: Predicted probabilities. Shape: (N, C) or (C,)
        label: One-hot labels, same shape as ``prediction``

    Returns:
        Scalar loss per sample
    """
    prediction, label = _as_matching_pair(prediction, label)
    p = prediction[label != 0]

    with np.errstate(divide="ignore"):
        neg_log = -np.log(p)
    penalty = np.asarray(ZERO_PROBABILITY_PENALTY, dtype=neg_log.dtype)
    contributions = np.where(p == 0, penalty, neg_log)

    return np.sum(contributions) / prediction.shape[0]
