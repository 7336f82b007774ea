# -*- coding: utf-8 -*-
"""
infotree.tree
=============

This module grows a binary decision tree by information gain and uses it to
classify feature vectors.

A tree is made of :class:`Branch` nodes, which send a row right when its value
in ``feature_index`` is strictly greater than ``threshold`` and left
otherwise, and :class:`Leaf` nodes, which predict the majority label of the
training rows that reached them together with the fraction of those rows
carrying that label (the leaf *confidence*).

:func:`sprout` is the recursive growth step.  A node becomes a leaf when the
depth budget is exhausted or when no column offers any information gain;
otherwise the best split is applied and both sides are grown one level
deeper.

:class:`DecisionTreeModel` owns the root of a grown tree and provides
classification, evaluation, rule export and pretty printing.
"""

# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
import numpy as np

from .data import Data, LabelledData
from .splitting import Split, find_best_split

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Nodes
# -----------------------------------------------------------------------------
class Node:
    """Base class of :class:`Branch` and :class:`Leaf`.

    Attributes
    ----------
    depth : int
        Depth at which the node was created (the root is at depth 0).
    data : LabelledData
        The training rows that reached this node.
    """

    is_leaf = False

    def __init__(self, data: LabelledData, depth: int):
        self.data = data
        self.depth = depth

    @property
    def n_samples(self) -> int:
        return len(self.data)


class Branch(Node):
    """Internal node splitting on ``features[feature_index] > threshold``.

    Attributes
    ----------
    feature_index : int
        Column used for the split.
    threshold : float
        One of the observed values of that column.
    gain : float
        Information gain of the split.
    left, right : Node
        Subtrees for rows ``<= threshold`` and ``> threshold``.
    """

    def __init__(self, data: LabelledData, depth: int, split: Split,
                 left: Node, right: Node):
        super().__init__(data, depth)
        self.feature_index: int = split.feature_index
        self.threshold: float = split.threshold
        self.gain: float = split.gain
        self.left = left
        self.right = right

    def next(self, features) -> Node:
        return self.right if features[self.feature_index] > self.threshold else self.left

    def __repr__(self):
        return (f"Branch(depth={self.depth}, samples={self.n_samples}, "
                f"feature={self.feature_index}, threshold={self.threshold:.4f}, gain={self.gain:.4f})")


class Leaf(Node):
    """Terminal node predicting the majority label of its rows.

    Attributes
    ----------
    label : object
        Most frequent label.  Ties go to the label met first in row order.
    confidence : float
        Share of rows carrying ``label``, in ``[0, 1]``.
    distribution : dict
        Count of every label in ``data.all_labels`` within this leaf.
    reason : str or None
        Why growth stopped here (``"max_depth"`` or ``"no_gain"``).

    Raises
    ------
    ValueError
        If ``data`` has no rows.
    """

    is_leaf = True

    def __init__(self, data: LabelledData, depth: int, reason: str | None = None):
        if data is None or len(data) == 0:
            raise ValueError("Can't predict class without data.")
        super().__init__(data, depth)
        self.reason = reason

        counts = dict.fromkeys(data.all_labels, 0)
        for label in data.labels.tolist():
            counts[label] += 1

        largest = 0
        predicted = None
        for label in dict.fromkeys(data.labels.tolist()):
            if counts[label] > largest:
                largest = counts[label]
                predicted = label

        self.label = predicted
        self.confidence: float = largest / len(data)
        self.distribution: dict = counts

    def __repr__(self):
        return (f"Leaf(depth={self.depth}, samples={self.n_samples}, label={self.label!r}, "
                f"confidence={self.confidence:.3f}, reason={self.reason!r})")


# -----------------------------------------------------------------------------
# Growth
# -----------------------------------------------------------------------------
def sprout(data: LabelledData, depth: int, max_depth: int) -> Node:
    """
    Grow the subtree for ``data`` starting at ``depth``.

    Parameters
    ----------
    data : LabelledData
        Rows reaching this node.  Must not be empty.
    depth : int
        Depth of the node being created.
    max_depth : int
        Depth at which branching stops.

    Returns
    -------
    Node
        A :class:`Leaf` if ``depth == max_depth`` or no split has positive
        information gain, otherwise a :class:`Branch` whose children were
        grown at ``depth + 1``.
    """
    if depth == max_depth:
        logger.debug("depth %d: leaf (max depth reached, %d samples)", depth, len(data))
        return Leaf(data, depth, reason="max_depth")

    split = find_best_split(data)
    if split is None:
        logger.debug("depth %d: leaf (no information gain, %d samples)", depth, len(data))
        return Leaf(data, depth, reason="no_gain")

    logger.debug("depth %d: split X[%d] > %r (gain=%.4f, %d samples)",
                 depth, split.feature_index, split.threshold, split.gain, len(data))
    goes_right = data.features[:, split.feature_index] > split.threshold
    left = sprout(data.subset(~goes_right), depth + 1, max_depth)
    right = sprout(data.subset(goes_right), depth + 1, max_depth)
    return Branch(data, depth, split, left, right)


# -----------------------------------------------------------------------------
# Model
# -----------------------------------------------------------------------------
class DecisionTreeModel:
    """
    Binary decision tree grown by information gain.

    The tree is grown once, at construction, and never changes afterwards;
    classifying rows only reads it.

    Parameters
    ----------
    training_data : LabelledData
        Training rows.  Must contain at least one row.
    max_depth : int
        Non-negative depth budget.  ``0`` gives a single leaf predicting the
        majority label of ``training_data``.

    Attributes
    ----------
    root : Node
        Root of the grown tree.
    max_depth : int
    n_features : int
        Number of feature columns expected by :meth:`classify`.

    Examples
    --------
    >>> data = LabelledData([[1.0], [2.0], [8.0], [9.0]], ["low", "low", "high", "high"])
    >>> model = DecisionTreeModel(data, max_depth=2)
    >>> model.classify([8.5])
    'high'
    """

    def __init__(self, training_data: LabelledData, max_depth: int):
        if isinstance(max_depth, bool) or not isinstance(max_depth, (int, np.integer)):
            raise ValueError(f"max_depth must be a non-negative int, got {max_depth!r}")
        if max_depth < 0:
            raise ValueError(f"max_depth must be a non-negative int, got {max_depth!r}")
        if not isinstance(training_data, LabelledData):
            raise ValueError("training_data must be a LabelledData instance")
        if len(training_data) == 0:
            raise ValueError("training_data must contain at least one row")

        self.max_depth = int(max_depth)
        self.n_features = training_data.n_columns
        self.root: Node = sprout(training_data, 0, self.max_depth)
        logger.debug("grew tree: depth=%d, leaves=%d", self.depth, self.n_leaves)

    # ------------------------------------------------------------------
    # Prediction
    # ------------------------------------------------------------------
    def _check_row(self, features) -> np.ndarray:
        x = np.asarray(features, dtype=float)
        if x.ndim != 1 or x.shape[0] != self.n_features:
            raise ValueError(
                f"Expected a feature vector of length {self.n_features}, got shape {x.shape}")
        return x

    def predict(self, features) -> Leaf:
        """Return the :class:`Leaf` reached by ``features``."""
        x = self._check_row(features)
        node = self.root
        while not node.is_leaf:
            node = node.next(x)
        return node

    def classify(self, features):
        """Predicted label for one feature vector."""
        return self.predict(features).label

    def classify_all(self, features) -> list:
        """Predicted label for every row of ``features``, in row order."""
        if isinstance(features, Data):
            features = features.features
        return [self.classify(row) for row in features]

    def test(self, data, labels=None) -> tuple[float, float]:
        """
        Evaluate the tree on labelled rows.

        Parameters
        ----------
        data : LabelledData or array-like of shape (n_rows, n_features)
            Rows to evaluate.  When a plain table is given, ``labels`` must
            hold the true label of each row.
        labels : sequence, optional

        Returns
        -------
        (error, accuracy)
            ``error`` is the mean of ``(1 - confidence) ** 2`` over the leaves
            reached; ``accuracy`` is the share of rows whose leaf label equals
            the true label.
        """
        if labels is not None:
            data = LabelledData(data.features if isinstance(data, Data) else data, labels)
        elif not isinstance(data, LabelledData):
            raise ValueError("labels are required unless data is a LabelledData instance")
        if len(data) == 0:
            raise ValueError("Cannot test on an empty data set.")

        err_sum = 0.0
        correct = 0
        for row, label in data.rows:
            leaf = self.predict(row)
            error = 1.0 - leaf.confidence
            err_sum += error * error
            if leaf.label == label:
                correct += 1
        return err_sum / len(data), correct / len(data)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def nodes(self):
        """Iterate over all nodes in pre-order (node, left subtree, right subtree)."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            yield node
            if not node.is_leaf:
                stack.append(node.right)
                stack.append(node.left)

    def leaves(self):
        return (node for node in self.nodes() if node.is_leaf)

    @property
    def depth(self) -> int:
        return max(node.depth for node in self.nodes())

    @property
    def n_leaves(self) -> int:
        return sum(1 for _ in self.leaves())

    # ------------------------------------------------------------------
    # Rule export / printing / Graphviz
    # ------------------------------------------------------------------
    def _feature_name(self, i: int, fn) -> str:
        return fn[i] if (fn is not None and 0 <= i < len(fn)) else f"X[{i}]"

    def export_rules(self, feature_names=None) -> list[str]:
        """
        Export every root-to-leaf path as a human-readable rule.

        Each rule has the form ``<antecedent> => <label> (confidence=...)``
        where the antecedent is the conjunction of the split conditions on the
        path, or ``<root>`` for a single-leaf tree.
        """
        rules: list[str] = []
        self._collect_rules(self.root, [], rules, feature_names)
        return rules

    def _collect_rules(self, node: Node, parts, rules, fn):
        if node.is_leaf:
            body = " AND ".join(parts) if parts else "<root>"
            rules.append(f"{body} => {node.label} (confidence={node.confidence:.3f})")
            return
        name = self._feature_name(node.feature_index, fn)
        self._collect_rules(node.left, parts + [f"{name} <= {node.threshold:.4f}"], rules, fn)
        self._collect_rules(node.right, parts + [f"{name} > {node.threshold:.4f}"], rules, fn)

    def print_tree(self, feature_names=None):
        """Pretty-print the tree to ``stdout``."""
        self._print_node(self.root, "", feature_names)

    def _print_node(self, node: Node, indent="", fn=None):
        if node.is_leaf:
            print(f"{indent}Predict {node.label} | confidence={node.confidence:.3f} | n={node.n_samples}")
            return
        name = self._feature_name(node.feature_index, fn)
        print(f"{indent}if {name} <= {node.threshold:.4f}:")
        self._print_node(node.left, indent + "  ", fn)
        print(f"{indent}else:")
        self._print_node(node.right, indent + "  ", fn)

    def export_graphviz(self, filename: str | None = None, *, feature_names=None,
                        format: str = "dot") -> str:
        """
        Export the tree structure in Graphviz format.

        Parameters
        ----------
        filename : str or None, default=None
            Basename of the output file.  If None, the DOT source is returned
            and nothing is written.
        feature_names : list[str], optional
            Names used in place of ``X[i]``.
        format : str, default="dot"
            ``'dot'`` writes the DOT source directly; any other format is
            rendered with the ``dot`` executable.

        Returns
        -------
        str
            The DOT source, or the path of the written file.

        Raises
        ------
        RuntimeError
            If the ``graphviz`` package is not installed.
        """
        try:
            import graphviz
        except ImportError as e:
            raise RuntimeError("Graphviz is required for export_graphviz but not installed.") from e
        dot = graphviz.Digraph(format=format)
        self._add_graph_nodes(dot, self.root, "0", feature_names)

        if filename is None:
            return dot.source
        if format.lower() == "dot":
            path = f"{filename}.dot"
            dot.save(path)
            return path
        dot.render(filename, cleanup=True)
        return f"{filename}.{format}"

    def _add_graph_nodes(self, dot, node: Node, name: str, fn):
        if node.is_leaf:
            dot.node(name, f"{node.label}\nconfidence={node.confidence:.3f}\nn={node.n_samples}",
                     shape="box", style="filled", color="lightgrey")
            return
        label = f"{self._feature_name(node.feature_index, fn)} <= {node.threshold:.4f}"
        dot.node(name, label, shape="ellipse", style="filled", color="lightblue")
        l_id, r_id = name + "L", name + "R"
        self._add_graph_nodes(dot, node.left, l_id, fn)
        self._add_graph_nodes(dot, node.right, r_id, fn)
        dot.edge(name, l_id, label="True")
        dot.edge(name, r_id, label="False")
