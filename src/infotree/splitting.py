# -*- coding: utf-8 -*-
"""
infotree.splitting
==================

Entropy, information gain and the search for the best binary split.

All functions here are pure: they read a column (or a whole
:class:`~infotree.data.LabelledData`) and return numbers.  Candidate
thresholds are the observed values of a column; rows with a value strictly
greater than the threshold form the right side of a split, all others the
left side.

The weighted entropy of each side is scaled by ``side_size / n_total`` where
``n_total`` is the row count of the dataset being split.  Gains no larger
than ``GAIN_TOLERANCE`` count as zero.
"""

from __future__ import annotations
from dataclasses import dataclass
import numpy as np

# gains at or below this are rounding noise of an uninformative split
GAIN_TOLERANCE = 1e-12


@dataclass(frozen=True)
class Split:
    """Winning split of a node: column, threshold value and its gain."""
    feature_index: int
    threshold: float
    gain: float


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
def _entropy_from_counts(counts: np.ndarray, total: int) -> float:
    if total <= 0:
        return 0.0
    p = np.asarray(counts, dtype=float) / total
    p = p[p > 0]
    return float(-np.sum(p * np.log2(p)))

def _clip_gain(gain: float) -> float:
    return 0.0 if gain <= GAIN_TOLERANCE else gain

def _label_positions(all_labels) -> dict:
    return {label: i for i, label in enumerate(all_labels)}

def _encode(labels, positions: dict) -> np.ndarray:
    codes = np.empty(len(labels), dtype=int)
    for i, label in enumerate(labels):
        try:
            codes[i] = positions[label]
        except KeyError:
            raise ValueError(f"all_labels does not contain label {label!r}.") from None
    return codes


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------
def entropy(labels, all_labels) -> float:
    """
    Entropy (in bits) of the label distribution of ``labels``.

    Parameters
    ----------
    labels : iterable
        Labels of the rows in a column or subset.
    all_labels : sequence
        Every label that may occur.  Labels absent from ``labels`` have
        probability zero and do not contribute.

    Returns
    -------
    float
        ``-sum(p * log2(p))`` over the labels with ``p > 0``; ``0.0`` for an
        empty input.

    Raises
    ------
    ValueError
        If ``labels`` contains a label missing from ``all_labels``.
    """
    labels = list(labels)
    if not labels:
        return 0.0
    codes = _encode(labels, _label_positions(all_labels))
    counts = np.bincount(codes, minlength=len(all_labels))
    return _entropy_from_counts(counts, len(labels))


def info_gain(column, threshold: float, n_total: int, all_labels) -> float:
    """
    Information gained by splitting ``column`` at ``threshold``.

    ``column`` is a sequence of ``(value, label)`` pairs.  Pairs whose value is
    ``<= threshold`` form the left side, the rest the right side.  Each side's
    entropy is weighted by its size divided by ``n_total``.
    """
    column = list(column)
    lesser = [label for value, label in column if value <= threshold]
    greater = [label for value, label in column if value > threshold]

    p_left = len(lesser) / n_total
    p_right = len(greater) / n_total

    whole = entropy((label for _, label in column), all_labels)
    return _clip_gain(whole - (p_left * entropy(lesser, all_labels)
                               + p_right * entropy(greater, all_labels)))


def best_threshold(values, labels, n_total: int, all_labels) -> tuple[float, float | None]:
    """
    Best threshold for a single column.

    Every distinct value is tried in ascending order; a candidate replaces the
    incumbent only when its gain is strictly greater, so ties keep the
    smallest threshold.  Gains equal those of :func:`info_gain` for the same
    candidate.

    Returns
    -------
    (gain, threshold)
        ``(0.0, None)`` when no threshold gives a positive gain.
    """
    values = np.asarray(values, dtype=float)
    n = values.shape[0]
    if n == 0:
        return 0.0, None

    order = np.argsort(values, kind="mergesort")
    v = values[order]
    codes = _encode(labels, _label_positions(all_labels))[order]

    K = len(all_labels)
    M = np.zeros((n, K), dtype=float)
    M[np.arange(n), codes] = 1.0
    SW = M.cumsum(axis=0); total = SW[-1]
    whole = _entropy_from_counts(total, n)

    uniq = np.unique(v)
    # number of rows <= each distinct value
    ends = np.searchsorted(v, uniq, side="right")

    best_gain, best_thr = 0.0, None
    for value, n_left in zip(uniq, ends):
        left = SW[n_left - 1]; right = total - left
        n_right = n - n_left
        p_left = n_left / n_total
        p_right = n_right / n_total
        gain = _clip_gain(whole - (p_left * _entropy_from_counts(left, n_left)
                                   + p_right * _entropy_from_counts(right, n_right)))
        if gain > best_gain:
            best_gain, best_thr = gain, float(value)
    return best_gain, best_thr


def find_best_split(data) -> Split | None:
    """
    Search every column of ``data`` for the split with the highest gain.

    Columns are examined in index order and a column only wins with a
    strictly greater gain than the current best, so ties favour the earliest
    column.

    Parameters
    ----------
    data : LabelledData
        Rows of the node being split.

    Returns
    -------
    Split or None
        ``None`` when no column yields positive information gain.
    """
    n_total = len(data)
    best = None
    best_gain = 0.0
    for j in range(data.n_columns):
        gain, thr = best_threshold(data.features[:, j], data.labels, n_total, data.all_labels)
        if gain > best_gain:
            best_gain = gain
            best = Split(feature_index=j, threshold=thr, gain=float(gain))
    return best
