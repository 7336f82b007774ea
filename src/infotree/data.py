# -*- coding: utf-8 -*-
"""
infotree.data
=============

Containers for the numeric tables consumed by the tree builder.

``Data`` wraps a rectangular feature table.  ``LabelledData`` pairs a feature
table with one label per row and remembers the full set of labels seen in the
training set, so that every subset produced while growing a tree can still
reason about labels it no longer contains.
"""

from __future__ import annotations
import numpy as np


def _as_feature_table(features) -> np.ndarray:
    if isinstance(features, np.ndarray):
        table = features
    else:
        rows = list(features)
        if rows and len({len(r) for r in rows}) > 1:
            raise ValueError("All feature rows must have the same number of columns.")
        table = np.asarray(rows, dtype=float)
        if table.ndim == 1 and table.size == 0:
            table = table.reshape(0, 0)
    if table.ndim != 2:
        raise ValueError(f"Features must be a 2-D table, got {table.ndim} dimension(s).")
    return np.asarray(table, dtype=float)


# -----------------------------------------------------------------------------
# Data
# -----------------------------------------------------------------------------
class Data:
    """A set of numeric data.

    Parameters
    ----------
    features : array-like of shape (n_rows, n_columns)
        Row-major numeric table.  Ragged rows raise ``ValueError``.
    """

    def __init__(self, features):
        self.features = _as_feature_table(features)

    def __len__(self) -> int:
        return self.features.shape[0]

    @property
    def n_columns(self) -> int:
        return self.features.shape[1]

    def to_labelled(self, label_column: int) -> "LabelledData":
        """Use one of the existing columns as the labels.

        The chosen column is removed from the feature table and its values
        become the label of each row.

        Parameters
        ----------
        label_column : int
            Index of the column holding the labels.

        Returns
        -------
        LabelledData

        Raises
        ------
        ValueError
            If ``label_column`` is not an integer index of an existing column.
        """
        if (isinstance(label_column, bool)
                or not isinstance(label_column, (int, np.integer))
                or not 0 <= label_column < self.n_columns):
            raise ValueError(
                f"label_column must be in [0, {self.n_columns}), got {label_column!r}")
        label_column = int(label_column)
        labels = self.features[:, label_column].tolist()
        features = np.delete(self.features, label_column, axis=1)
        return LabelledData(features, labels)


# -----------------------------------------------------------------------------
# LabelledData
# -----------------------------------------------------------------------------
class LabelledData(Data):
    """A set of numeric data with one label of any hashable type per row.

    Parameters
    ----------
    features : array-like of shape (n_rows, n_columns)
        Row-major numeric table.
    labels : sequence of length n_rows
        ``labels[i]`` is the label of ``features[i]``.
    all_labels : sequence, optional
        Every label that can occur.  Defaults to the distinct values of
        ``labels`` in first-seen order.  Subsets inherit it unchanged.
    index : sequence of int, optional
        Identity of each row.  Defaults to ``0..n_rows-1``; subsets keep the
        identities of the rows they were taken from.

    Attributes
    ----------
    labels : ndarray of dtype object
    all_labels : tuple
    index : ndarray of int
    """

    def __init__(self, features, labels, all_labels=None, index=None):
        super().__init__(features)
        labels = list(labels)
        # element-wise so tuple labels are not broadcast into extra dimensions
        self.labels = np.empty(len(labels), dtype=object)
        for i, label in enumerate(labels):
            self.labels[i] = label
        if len(self.labels) != self.features.shape[0]:
            raise ValueError(
                "The number of data rows is not equal to the number of labels. "
                f"Rows: {self.features.shape[0]}; Labels: {len(self.labels)}")

        if all_labels is None:
            self.all_labels = tuple(dict.fromkeys(self.labels.tolist()))
        else:
            self.all_labels = tuple(all_labels)
            known = set(self.all_labels)
            unknown = [label for label in dict.fromkeys(self.labels.tolist()) if label not in known]
            if unknown:
                raise ValueError(f"all_labels does not contain label(s) {unknown}.")

        if index is None:
            self.index = np.arange(len(self.labels))
        else:
            self.index = np.asarray(index, dtype=int)
            if self.index.shape != (len(self.labels),):
                raise ValueError("index must have one entry per row.")

    @property
    def rows(self):
        """Iterate over ``(row, label)`` pairs."""
        return zip(self.features, self.labels)

    def column(self, i: int) -> list[tuple]:
        """Return column ``i`` as a list of ``(value, label)`` pairs."""
        return list(zip(self.features[:, i].tolist(), self.labels.tolist()))

    def subset(self, mask) -> "LabelledData":
        """Rows selected by a boolean mask (or index array), same label universe."""
        mask = np.asarray(mask)
        return LabelledData(self.features[mask], self.labels[mask],
                            all_labels=self.all_labels, index=self.index[mask])

    def __repr__(self) -> str:
        return (f"LabelledData(n_rows={len(self)}, n_columns={self.n_columns}, "
                f"labels={list(self.all_labels)})")
