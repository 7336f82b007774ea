from time import perf_counter
from sklearn.datasets import load_iris
from sklearn.model_selection import train_test_split
from sklearn.metrics import classification_report, accuracy_score
from sklearn.tree import DecisionTreeClassifier

from infotree import DecisionTreeModel, InfoGainClassifier, LabelledData

# --- 1. Load the data ---
iris = load_iris()
X, y = iris.data, iris.target_names[iris.target]
feats = list(iris.feature_names)
X_train, X_test, y_train, y_test = train_test_split(X, y, test_size=0.3, random_state=42, stratify=y)

# --- 2. Core model ---
t0 = perf_counter()
model = DecisionTreeModel(LabelledData(X_train, y_train.tolist()), max_depth=3)
print(f"DecisionTreeModel fit: {perf_counter()-t0:.3f} s")
error, accuracy = model.test(X_test, y_test.tolist())
print(f"test error={error:.4f} accuracy={accuracy:.4f}")
model.print_tree(feature_names=feats)
for rule in model.export_rules(feature_names=feats):
    print(rule)

# --- 3. scikit-learn front end vs. sklearn's own tree ---
clf = InfoGainClassifier(max_depth=3, feature_names=feats).fit(X_train, y_train)
print(classification_report(y_test, clf.predict(X_test)))

ref = DecisionTreeClassifier(criterion="entropy", max_depth=3, random_state=42).fit(X_train, y_train)
print(f"infotree accuracy: {accuracy_score(y_test, clf.predict(X_test)):.4f}")
print(f"sklearn  accuracy: {accuracy_score(y_test, ref.predict(X_test)):.4f}")

try:
    print(model.export_graphviz("iris_tree", feature_names=feats, format="dot"))
except RuntimeError as e:
    print(f"Skipping Graphviz export: {e}")
