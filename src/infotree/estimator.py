# -*- coding: utf-8 -*-
"""
infotree.estimator
==================

scikit-learn style front end for :class:`~infotree.tree.DecisionTreeModel`.
"""

from __future__ import annotations
import logging
from contextlib import contextmanager
import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin

from .data import LabelledData
from .tree import DecisionTreeModel


class InfoGainClassifier(ClassifierMixin, BaseEstimator):
    """
    Decision tree classifier grown by information gain.

    Splits are binary, on numeric features, at one of the observed values of
    a column.  Growth stops at ``max_depth`` or when no split yields any
    information gain.

    Parameters
    ----------
    max_depth : int, default=5
        Depth budget of the tree.  ``0`` fits a single leaf.
    feature_names : list[str] or None, default=None
        Optional names used by :meth:`export_rules` and :meth:`print_tree`.
    verbose : int, default=0
        When positive, growth of the tree is logged at DEBUG level to
        ``stderr``.

    Attributes
    ----------
    model_ : DecisionTreeModel
        The fitted tree.
    classes_ : ndarray
        Sorted distinct labels seen during ``fit``.
    n_features_in_ : int
        Number of features seen during ``fit``.
    """

    def __init__(self, *, max_depth: int = 5, feature_names: list[str] | None = None,
                 verbose: int = 0):
        self.max_depth = max_depth
        self.feature_names = feature_names
        self.verbose = verbose

    def _check_fitted(self):
        if getattr(self, "model_", None) is None:
            raise ValueError("Estimator not fitted. Call fit(...) first.")

    def _names(self, feature_names):
        return feature_names if feature_names is not None else self.feature_names

    def _check_X(self, X) -> np.ndarray:
        X = np.asarray(X, dtype=float)
        if X.ndim != 2 or X.shape[1] != self.n_features_in_:
            raise ValueError(
                f"X has shape {X.shape}; expected (n_samples, {self.n_features_in_})")
        return X

    @contextmanager
    def _growth_logging(self):
        # logger level and handler are restored once fit returns
        if not self.verbose:
            yield
            return
        pkg_logger = logging.getLogger("infotree")
        old_level = pkg_logger.level
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        pkg_logger.addHandler(handler)
        pkg_logger.setLevel(logging.DEBUG)
        try:
            yield
        finally:
            pkg_logger.removeHandler(handler)
            pkg_logger.setLevel(old_level)

    def fit(self, X, y):
        """Grow the tree on ``X`` (n_samples, n_features) and labels ``y``."""
        X = np.asarray(X, dtype=float)
        y = np.asarray(y)
        if X.ndim != 2:
            raise ValueError("X must be a 2-D array")
        if y.ndim != 1:
            raise ValueError(f"y must be a 1-D array, got shape {y.shape}")
        if len(y) != X.shape[0]:
            raise ValueError("y must have the same length as X")
        if self.feature_names is not None and len(self.feature_names) != X.shape[1]:
            raise ValueError("feature_names length must match X.shape[1]")

        self.n_features_in_ = X.shape[1]
        self.classes_ = np.unique(y)
        with self._growth_logging():
            self.model_ = DecisionTreeModel(LabelledData(X, y.tolist()), self.max_depth)
        return self

    def predict(self, X):
        """
        Predict class labels for the provided samples.

        Returns
        -------
        ndarray of shape (n_samples,)

        Raises
        ------
        ValueError
            If the estimator has not been fitted or ``X`` has the wrong
            number of features.
        """
        self._check_fitted()
        X = self._check_X(X)
        return np.array([self.model_.classify(x) for x in X])

    def predict_proba(self, X):
        """
        Class distribution of the leaf reached by each sample.

        Returns
        -------
        ndarray of shape (n_samples, n_classes)
            Columns follow ``classes_``.
        """
        self._check_fitted()
        X = self._check_X(X)
        proba = np.zeros((X.shape[0], len(self.classes_)), dtype=float)
        for i, x in enumerate(X):
            leaf = self.model_.predict(x)
            for k, cls in enumerate(self.classes_.tolist()):
                proba[i, k] = leaf.distribution.get(cls, 0) / leaf.n_samples
        return proba

    def confidence(self, X):
        """Leaf confidence of the prediction for each sample."""
        self._check_fitted()
        X = self._check_X(X)
        return np.array([self.model_.predict(x).confidence for x in X])

    def test(self, X, y) -> tuple[float, float]:
        """``(error, accuracy)`` as computed by :meth:`DecisionTreeModel.test`."""
        self._check_fitted()
        return self.model_.test(self._check_X(X), list(y))

    def export_rules(self, *, feature_names=None) -> list[str]:
        self._check_fitted()
        return self.model_.export_rules(self._names(feature_names))

    def print_tree(self, feature_names=None):
        self._check_fitted()
        self.model_.print_tree(self._names(feature_names))
