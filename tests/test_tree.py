import numpy as np
import pytest
from infotree import Branch, DecisionTreeModel, LabelledData, Leaf, sprout


def _low_high():
    """Return the four-row dataset separable at 2.0 on its only column."""
    return LabelledData([[1.0], [2.0], [8.0], [9.0]], ["low", "low", "high", "high"])


def _random_dataset(n=60, seed=0):
    rng = np.random.default_rng(seed)
    X = rng.integers(0, 10, size=(n, 3)).astype(float)
    y = rng.choice(["a", "b", "c"], size=n).tolist()
    return LabelledData(X, y)


def test_low_high_scenario():
    data = _low_high()
    model = DecisionTreeModel(data, max_depth=2)
    root = model.root
    assert isinstance(root, Branch)
    assert root.feature_index == 0
    assert root.threshold == 2.0
    assert root.gain > 0
    assert isinstance(root.left, Leaf) and isinstance(root.right, Leaf)
    assert root.left.label == "low" and root.left.confidence == 1.0
    assert root.right.label == "high" and root.right.confidence == 1.0
    assert model.classify([1.5]) == "low"
    assert model.classify([8.5]) == "high"
    assert model.test(data) == (0.0, 1.0)


def test_pure_children_stop_without_gain():
    model = DecisionTreeModel(_low_high(), max_depth=5)
    assert model.depth == 1
    assert all(leaf.reason == "no_gain" for leaf in model.leaves())


@pytest.mark.parametrize("max_depth", [0, 1, 5])
def test_single_label_gives_single_leaf(max_depth):
    data = LabelledData([[1.0, 3.0], [2.0, 1.0], [3.0, 2.0]], ["z", "z", "z"])
    model = DecisionTreeModel(data, max_depth=max_depth)
    assert isinstance(model.root, Leaf)
    assert model.root.label == "z"
    assert model.root.confidence == 1.0


def test_max_depth_zero_is_majority_leaf():
    data = LabelledData([[1.0], [2.0], [3.0], [4.0]], ["a", "b", "b", "c"])
    model = DecisionTreeModel(data, max_depth=0)
    assert isinstance(model.root, Leaf)
    assert model.root.label == "b"
    assert model.root.confidence == 0.5
    assert model.root.reason == "max_depth"
    assert model.root.distribution == {"a": 1, "b": 2, "c": 1}


def test_majority_tie_goes_to_first_seen_label():
    data = LabelledData([[1.0], [2.0], [3.0], [4.0]], ["b", "a", "a", "b"],
                        all_labels=["a", "b"])
    leaf = Leaf(data, 0)
    assert leaf.label == "b"
    assert leaf.confidence == 0.5


def test_separable_dataset_full_accuracy():
    data = LabelledData([[1.0], [2.0], [3.0], [4.0]], ["A", "A", "B", "B"])
    model = DecisionTreeModel(data, max_depth=1)
    error, accuracy = model.test(data)
    assert accuracy == 1.0
    assert error == 0.0


def test_test_reports_confidence_error():
    data = LabelledData([[1.0], [1.0], [1.0], [1.0]], ["a", "a", "a", "b"])
    model = DecisionTreeModel(data, max_depth=3)
    error, accuracy = model.test(data)
    assert error == pytest.approx(0.0625)
    assert accuracy == pytest.approx(0.75)


def test_test_accepts_features_and_labels():
    data = _random_dataset()
    model = DecisionTreeModel(data, max_depth=3)
    assert model.test(data.features, data.labels.tolist()) == model.test(data)


def test_leaf_confidence_in_unit_interval():
    model = DecisionTreeModel(_random_dataset(), max_depth=4)
    for leaf in model.leaves():
        assert 0.0 <= leaf.confidence <= 1.0


def test_branch_children_partition_rows():
    model = DecisionTreeModel(_random_dataset(), max_depth=4)
    for node in model.nodes():
        if node.is_leaf:
            continue
        left = set(node.left.data.index.tolist())
        right = set(node.right.data.index.tolist())
        assert not left & right
        assert left | right == set(node.data.index.tolist())
        assert node.left.depth == node.right.depth == node.depth + 1
        assert (node.left.data.features[:, node.feature_index] <= node.threshold).all()
        assert (node.right.data.features[:, node.feature_index] > node.threshold).all()


@pytest.mark.parametrize("max_depth", [0, 1, 2, 4])
def test_depth_bound(max_depth):
    model = DecisionTreeModel(_random_dataset(seed=3), max_depth=max_depth)
    assert all(node.depth <= max_depth for node in model.nodes())
    assert model.depth <= max_depth


def test_threshold_is_observed_value():
    data = _random_dataset(seed=5)
    model = DecisionTreeModel(data, max_depth=3)
    for node in model.nodes():
        if not node.is_leaf:
            assert node.threshold in set(data.features[:, node.feature_index].tolist())


def test_classify_is_idempotent():
    model = DecisionTreeModel(_random_dataset(), max_depth=4)
    x = [4.0, 2.0, 7.0]
    n_nodes = sum(1 for _ in model.nodes())
    assert model.classify(x) == model.classify(x)
    assert sum(1 for _ in model.nodes()) == n_nodes


def test_classify_all_preserves_order():
    model = DecisionTreeModel(_low_high(), max_depth=2)
    assert model.classify_all([[9.0], [0.0], [5.0], [2.0]]) == ["high", "low", "high", "low"]


def test_sprout_at_max_depth_returns_leaf():
    node = sprout(_low_high(), 2, 2)
    assert isinstance(node, Leaf)
    assert node.depth == 2


def test_empty_leaf_raises():
    with pytest.raises(ValueError):
        Leaf(LabelledData([], []), 0)


@pytest.mark.parametrize("max_depth", [-1, 1.5, True, "2"])
def test_invalid_max_depth_raises(max_depth):
    with pytest.raises(ValueError):
        DecisionTreeModel(_low_high(), max_depth=max_depth)


def test_empty_training_data_raises():
    with pytest.raises(ValueError):
        DecisionTreeModel(LabelledData([], []), max_depth=2)


def test_wrong_feature_count_raises():
    model = DecisionTreeModel(_low_high(), max_depth=2)
    with pytest.raises(ValueError):
        model.classify([1.0, 2.0])


def test_export_rules():
    model = DecisionTreeModel(_low_high(), max_depth=2)
    rules = model.export_rules(feature_names=["x"])
    assert rules == [
        "x <= 2.0000 => low (confidence=1.000)",
        "x > 2.0000 => high (confidence=1.000)",
    ]
    assert DecisionTreeModel(_low_high(), max_depth=0).export_rules() == [
        "<root> => low (confidence=0.500)"
    ]


def test_print_tree(capsys):
    DecisionTreeModel(_low_high(), max_depth=2).print_tree()
    out = capsys.readouterr().out
    assert "if X[0] <= 2.0000:" in out
    assert "Predict high" in out


def test_export_graphviz_source():
    pytest.importorskip("graphviz")
    model = DecisionTreeModel(_low_high(), max_depth=2)
    src = model.export_graphviz()
    assert "X[0] <= 2.0000" in src


def test_uninformative_split_gives_single_leaf():
    data = LabelledData([[1]] * 3 + [[2]] * 6, list("abc") + list("aabbcc"))
    model = DecisionTreeModel(data, max_depth=3)
    assert isinstance(model.root, Leaf)
    assert model.root.reason == "no_gain"
    assert model.n_leaves == 1
