# infotree/__init__.py
"""
infotree: binary decision trees grown by information gain.

Exports:
    - DecisionTreeModel
    - InfoGainClassifier
    - Data, LabelledData
    - entropy, info_gain
    - MinMaxNormalizer, ZScoreNormalizer, OrderOfMagnitudeNormalizer
"""
from .data import Data, LabelledData
from .splitting import Split, entropy, info_gain, find_best_split
from .tree import Node, Branch, Leaf, sprout, DecisionTreeModel
from .estimator import InfoGainClassifier
from .normalize import MinMaxNormalizer, ZScoreNormalizer, OrderOfMagnitudeNormalizer

__all__ = [
    "Data", "LabelledData",
    "Split", "entropy", "info_gain", "find_best_split",
    "Node", "Branch", "Leaf", "sprout", "DecisionTreeModel",
    "InfoGainClassifier",
    "MinMaxNormalizer", "ZScoreNormalizer", "OrderOfMagnitudeNormalizer",
]
__version__ = "0.1.0"
