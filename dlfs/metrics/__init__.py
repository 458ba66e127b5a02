from .loss import ZERO_PROBABILITY_PENALTY, sum_squared_error, cross_entropy_error

__all__ = [
    "ZERO_PROBABILITY_PENALTY",
    "sum_squared_error",
    "cross_entropy_error",
]
