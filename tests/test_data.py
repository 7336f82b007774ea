import numpy as np
import pytest
from infotree import Data, LabelledData


def test_labelled_data_defaults():
    data = LabelledData([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]], ["b", "a", "b"])
    assert len(data) == 3
    assert data.n_columns == 2
    assert data.all_labels == ("b", "a")
    assert data.index.tolist() == [0, 1, 2]
    assert data.column(1) == [(2.0, "b"), (4.0, "a"), (6.0, "b")]


def test_row_label_mismatch_raises():
    with pytest.raises(ValueError):
        LabelledData([[1.0], [2.0]], ["a"])


def test_ragged_rows_raise():
    with pytest.raises(ValueError):
        LabelledData([[1.0, 2.0], [3.0]], ["a", "b"])


def test_label_outside_all_labels_raises():
    with pytest.raises(ValueError):
        LabelledData([[1.0], [2.0]], ["a", "c"], all_labels=["a", "b"])


def test_subset_keeps_label_universe_and_row_identity():
    data = LabelledData([[1.0], [2.0], [3.0], [4.0]], ["a", "a", "b", "c"])
    sub = data.subset(np.array([False, True, False, True]))
    assert sub.all_labels == ("a", "b", "c")
    assert sub.index.tolist() == [1, 3]
    assert sub.labels.tolist() == ["a", "c"]


def test_to_labelled_moves_column_to_labels():
    data = Data([[1.0, 0.0, 5.0], [2.0, 1.0, 6.0]])
    labelled = data.to_labelled(1)
    assert labelled.features.tolist() == [[1.0, 5.0], [2.0, 6.0]]
    assert labelled.labels.tolist() == [0.0, 1.0]


@pytest.mark.parametrize("col", [-1, 3, 10])
def test_to_labelled_out_of_range(col):
    data = Data([[1.0, 0.0, 5.0]])
    with pytest.raises(ValueError):
        data.to_labelled(col)


@pytest.mark.parametrize("col", [1.5, 1.0, "1", True])
def test_to_labelled_rejects_non_integer(col):
    data = Data([[1.0, 0.0, 5.0]])
    with pytest.raises(ValueError):
        data.to_labelled(col)


def test_to_labelled_accepts_numpy_integer():
    data = Data([[1.0, 0.0, 5.0]])
    assert data.to_labelled(np.int64(2)).labels.tolist() == [5.0]
