# -*- coding: utf-8 -*-
"""Column-wise rescaling of feature tables."""

from __future__ import annotations
import numpy as np
from sklearn.base import BaseEstimator, TransformerMixin

from .data import Data


def _safe_scale(X: np.ndarray, offset: np.ndarray, scale: np.ndarray) -> np.ndarray:
    # constant columns (scale == 0) map to 0.0
    out = np.zeros_like(X, dtype=float)
    ok = scale != 0
    out[:, ok] = (X[:, ok] - offset[ok]) / scale[ok]
    return out


class _Normalizer(TransformerMixin, BaseEstimator):

    def _check_X(self, X) -> np.ndarray:
        X = np.asarray(X, dtype=float)
        if X.ndim != 2:
            raise ValueError("X must be a 2-D array")
        return X

    def _check_fitted(self):
        if not hasattr(self, "n_features_in_"):
            raise ValueError("Normalizer not fitted. Call fit(...) first.")

    def normalize(self, data: Data) -> Data:
        """Fit on ``data`` and return a new, normalized :class:`Data`."""
        return Data(self.fit_transform(data.features))


class MinMaxNormalizer(_Normalizer):
    """Scale each column so that its minimum maps to 0 and its maximum to 1."""

    def fit(self, X, y=None):
        X = self._check_X(X)
        self.min_ = X.min(axis=0)
        self.max_ = X.max(axis=0)
        self.n_features_in_ = X.shape[1]
        return self

    def transform(self, X):
        self._check_fitted()
        return _safe_scale(self._check_X(X), self.min_, self.max_ - self.min_)


class ZScoreNormalizer(_Normalizer):
    """Center each column on its mean and divide by its (population) standard deviation."""

    def fit(self, X, y=None):
        X = self._check_X(X)
        self.mean_ = X.mean(axis=0)
        self.std_ = X.std(axis=0)
        self.n_features_in_ = X.shape[1]
        return self

    def transform(self, X):
        self._check_fitted()
        return _safe_scale(self._check_X(X), self.mean_, self.std_)


class OrderOfMagnitudeNormalizer(_Normalizer):
    """Divide every value by a fixed scalar ``k``.

    Parameters
    ----------
    k : float, default=1.0
        Divisor.  Must be non-zero.
    """

    def __init__(self, k: float = 1.0):
        self.k = k

    def fit(self, X, y=None):
        if float(self.k) == 0.0:
            raise ValueError("k must be non-zero")
        self.n_features_in_ = self._check_X(X).shape[1]
        return self

    def transform(self, X):
        self._check_fitted()
        return self._check_X(X) / float(self.k)
