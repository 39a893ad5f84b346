"""
Linear severity predictor adapter - Implements SeverityPredictor protocol.

This module provides a stand-in for the trained alert model: a weighted
sum of the three features plus a bias, with coefficients taken from
settings. Swap in an adapter backed by a real model without touching
the domain.
"""

import logging
from collections.abc import Sequence

logger = logging.getLogger(__name__)


class LinearSeverityPredictor:
    """
    Implements SeverityPredictor protocol via fixed coefficients.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, weights: Sequence[float], bias: float = 0.0) -> None:
        if len(weights) != 3:
            raise ValueError(f"expected 3 weights, got {len(weights)}")
        self._weights = tuple(float(w) for w in weights)
        self._bias = float(bias)

    def predict_severity(self, feature1: float, feature2: float, feature3: float) -> float:
        features = (feature1, feature2, feature3)
        score = self._bias + sum(w * f for w, f in zip(self._weights, features))
        logger.debug("Predicted severity %.4f for features %s", score, features)
        return score
